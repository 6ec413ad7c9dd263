"""Rule-based outfit recommendation with transparent diagnostics.

The engine narrows the wardrobe with hard filters (occasion, season, colors,
exclusions) and then fills slots in a fixed order, picking one item per slot
at random with a bias toward favorites:

1. top
2. dress or bottom (a chosen dress replaces the top)
3. outerwear, only for fall/winter requests or cold weather
4. shoes
5. accessories, always for formal/special occasions, otherwise 70% of the time

All randomness flows through a single ``rng`` argument (anything with
``random()`` and ``choice(seq)``, e.g. :class:`random.Random`) so callers can
make selections reproducible. The engine only reads items; saving a suggestion
is a separate, explicit repository call.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from models.clothing_item import ClothingItem, from_raw_metadata
from models.taxonomy import WardrobeValidationError, normalize_color_name, normalize_season_name
from tools.observability import instrument_operation

if TYPE_CHECKING:
    from models.outfit import Outfit
    from tools.wardrobe_repository import WardrobeRepository

logger = logging.getLogger(__name__)

FAVORITE_BIAS = 0.7
DRESS_PROBABILITY = 0.4
ACCESSORY_PROBABILITY = 0.7
OUTERWEAR_SEASONS = ("fall", "winter")
COLD_WEATHER = "cold"
ACCESSORY_OCCASIONS = ("formal", "special")
DRESS_PREFERENCE = "dresses"
MIN_SUGGESTION_ITEMS = 2

_DEFAULT_RNG = random.Random()


class RandomSource(Protocol):
    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[Any]) -> Any:
        ...


def _clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lower()
    return cleaned or None


def _clean_list(values: Any) -> List[str]:
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple, set, frozenset)):
        return []
    return [str(value).strip() for value in values if str(value).strip()]


def _season(value: Any) -> Optional[str]:
    cleaned = _clean_text(value)
    return normalize_season_name(cleaned) if cleaned else None


@dataclass(frozen=True)
class SuggestionRequest:
    """Constraints for one suggestion; a missing field means no constraint."""

    occasion: Optional[str] = None
    season: Optional[str] = None
    weather: Optional[str] = None
    colors: Sequence[str] = ()
    mood: Optional[str] = None
    exclude_items: Sequence[str] = ()
    style_preference: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SuggestionRequest":
        """Build a request from loose input, tolerating camelCase keys and junk values."""

        data = dict(data or {})
        return cls(
            occasion=_clean_text(data.get("occasion")),
            season=_season(data.get("season")),
            weather=_clean_text(data.get("weather")),
            colors=tuple(normalize_color_name(c) for c in _clean_list(data.get("colors"))),
            mood=_clean_text(data.get("mood")),
            exclude_items=tuple(_clean_list(data.get("exclude_items", data.get("excludeItems")))),
            style_preference=_clean_text(data.get("style_preference", data.get("stylePreference"))),
        )


@dataclass(frozen=True)
class CandidateSelectionResult:
    items: List[ClothingItem]
    diagnostics: Dict[str, object]


@dataclass(frozen=True)
class OutfitSuggestion:
    item_ids: List[str]
    diagnostics: Dict[str, object] = field(default_factory=dict)

    @property
    def usable(self) -> bool:
        return is_usable_suggestion(self.item_ids)


def _coerce_request(request: SuggestionRequest | Mapping[str, Any] | None) -> SuggestionRequest:
    if isinstance(request, SuggestionRequest):
        return SuggestionRequest.from_mapping(request.__dict__)
    if isinstance(request, Mapping):
        return SuggestionRequest.from_mapping(request)
    if request is not None and hasattr(request, "model_dump"):
        return SuggestionRequest.from_mapping(request.model_dump())
    return SuggestionRequest()


def _coerce_items(raw_items: Iterable[ClothingItem | Mapping[str, Any]]) -> List[ClothingItem]:
    items = []
    for raw in raw_items or []:
        if isinstance(raw, ClothingItem):
            items.append(raw)
            continue
        try:
            items.append(from_raw_metadata(dict(raw)))
        except (WardrobeValidationError, TypeError, ValueError) as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


def filter_candidates(
    request: SuggestionRequest | Mapping[str, Any] | None, raw_items: Iterable[ClothingItem | Mapping[str, Any]]
) -> CandidateSelectionResult:
    """Apply the hard filters in order: occasion, season, colors, exclusions."""

    request = _coerce_request(request)
    items = _coerce_items(raw_items)
    diagnostics: Dict[str, object] = {"initial_count": len(items), "applied_filters": []}

    if request.occasion:
        items = [item for item in items if request.occasion in item.occasions]
        diagnostics["applied_filters"].append({"type": "occasion", "value": request.occasion, "kept": len(items)})
    if request.season:
        items = [item for item in items if item.is_in_season(request.season)]
        diagnostics["applied_filters"].append({"type": "season", "value": request.season, "kept": len(items)})
    if request.colors:
        wanted = set(request.colors)
        items = [item for item in items if wanted.intersection(item.colors)]
        diagnostics["applied_filters"].append({"type": "colors", "value": sorted(wanted), "kept": len(items)})
    if request.exclude_items:
        excluded = set(request.exclude_items)
        items = [item for item in items if item.item_id not in excluded]
        diagnostics["applied_filters"].append({"type": "exclude_items", "value": sorted(excluded), "kept": len(items)})

    diagnostics["final_count"] = len(items)
    logger.info("Filtered wardrobe from %s to %s candidates", diagnostics["initial_count"], len(items))
    return CandidateSelectionResult(items=items, diagnostics=diagnostics)


def pick_with_favorite_bias(pool: Sequence[ClothingItem], rng: RandomSource) -> ClothingItem:
    """Pick one item, choosing among favorites 70% of the time when any exist."""

    favorites = [item for item in pool if item.favorite]
    if favorites and rng.random() < FAVORITE_BIAS:
        return rng.choice(favorites)
    return rng.choice(pool)


def _by_category(items: Sequence[ClothingItem], category: str) -> List[ClothingItem]:
    return [item for item in items if item.category == category]


@instrument_operation("suggest_outfit")
def suggest_outfit(
    request: SuggestionRequest | Mapping[str, Any] | None,
    items: Iterable[ClothingItem | Mapping[str, Any]],
    rng: Optional[RandomSource] = None,
) -> OutfitSuggestion:
    """Select one item per active slot and return the ids in slot order."""

    request = _coerce_request(request)
    rng = rng or _DEFAULT_RNG
    candidates = filter_candidates(request, items)
    pool = candidates.items
    slots: Dict[str, Optional[str]] = {}
    chosen: List[str] = []

    tops = _by_category(pool, "tops")
    top_id: Optional[str] = None
    if tops:
        top_id = pick_with_favorite_bias(tops, rng).item_id
        chosen.append(top_id)
    slots["top"] = top_id

    bottoms = _by_category(pool, "bottoms")
    dresses = _by_category(pool, "dresses")
    slots["dress"] = None
    slots["bottom"] = None
    if dresses and (
        request.style_preference == DRESS_PREFERENCE or not bottoms or rng.random() < DRESS_PROBABILITY
    ):
        if top_id is not None:
            chosen.remove(top_id)
            slots["top"] = None
        dress_id = pick_with_favorite_bias(dresses, rng).item_id
        chosen.append(dress_id)
        slots["dress"] = dress_id
    elif bottoms:
        bottom_id = pick_with_favorite_bias(bottoms, rng).item_id
        chosen.append(bottom_id)
        slots["bottom"] = bottom_id

    slots["outerwear"] = None
    if request.season in OUTERWEAR_SEASONS or request.weather == COLD_WEATHER:
        outerwear = _by_category(pool, "outerwear")
        if outerwear:
            slots["outerwear"] = pick_with_favorite_bias(outerwear, rng).item_id
            chosen.append(slots["outerwear"])

    slots["shoes"] = None
    shoes = _by_category(pool, "shoes")
    if shoes:
        slots["shoes"] = pick_with_favorite_bias(shoes, rng).item_id
        chosen.append(slots["shoes"])

    slots["accessories"] = None
    accessories = _by_category(pool, "accessories")
    if accessories and (request.occasion in ACCESSORY_OCCASIONS or rng.random() < ACCESSORY_PROBABILITY):
        slots["accessories"] = pick_with_favorite_bias(accessories, rng).item_id
        chosen.append(slots["accessories"])

    diagnostics: Dict[str, object] = {
        **candidates.diagnostics,
        "slots": slots,
        "chosen_ids": list(chosen),
        "mood": request.mood,
    }
    logger.info("Suggested outfit with %s items", len(chosen))
    return OutfitSuggestion(item_ids=chosen, diagnostics=diagnostics)


def generate_outfit(
    request: SuggestionRequest | Mapping[str, Any] | None,
    items: Iterable[ClothingItem | Mapping[str, Any]],
    rng: Optional[RandomSource] = None,
) -> List[str]:
    return suggest_outfit(request, items, rng=rng).item_ids


def get_outfit_suggestion(
    repository: "WardrobeRepository",
    request: SuggestionRequest | Mapping[str, Any] | None,
    rng: Optional[RandomSource] = None,
) -> List[ClothingItem]:
    """Generate a suggestion from the repository and resolve ids to items."""

    item_ids = generate_outfit(request, repository.list_items(), rng=rng)
    resolved = (repository.get_item_by_id(item_id) for item_id in item_ids)
    return [item for item in resolved if item is not None]


def is_usable_suggestion(item_ids: Sequence[Any]) -> bool:
    return len(item_ids) >= MIN_SUGGESTION_ITEMS


def season_for_date(day: date) -> str:
    """Meteorological northern-hemisphere season for ``day``."""

    if 3 <= day.month <= 5:
        return "spring"
    if 6 <= day.month <= 8:
        return "summer"
    if 9 <= day.month <= 11:
        return "fall"
    return "winter"


def suggestion_outfit_name(request: SuggestionRequest) -> str:
    if request.occasion:
        return f"{request.occasion.capitalize()} Outfit"
    return "Today's Outfit"


def suggestion_notes(request: SuggestionRequest) -> Optional[str]:
    if request.weather and request.mood:
        return f"Generated for {request.weather} weather with a {request.mood} mood."
    if request.weather:
        return f"Generated for {request.weather} weather."
    if request.mood:
        return f"Generated with a {request.mood} mood."
    return None


def save_suggestion(
    repository: "WardrobeRepository",
    request: SuggestionRequest | Mapping[str, Any] | None,
    item_ids: Sequence[str],
    name: Optional[str] = None,
) -> Optional["Outfit"]:
    """Persist an accepted suggestion as an outfit; too-small suggestions are refused."""

    if not is_usable_suggestion(item_ids):
        logger.info("Refusing to save suggestion with %s items", len(item_ids))
        return None
    request = _coerce_request(request)
    return repository.add_outfit(
        {
            "name": name or suggestion_outfit_name(request),
            "items": list(item_ids),
            "occasion": request.occasion or "casual",
            "seasons": ["all"],
            "favorite": False,
            "notes": suggestion_notes(request),
        }
    )


__all__ = [
    "FAVORITE_BIAS",
    "DRESS_PROBABILITY",
    "ACCESSORY_PROBABILITY",
    "MIN_SUGGESTION_ITEMS",
    "RandomSource",
    "SuggestionRequest",
    "CandidateSelectionResult",
    "OutfitSuggestion",
    "filter_candidates",
    "pick_with_favorite_bias",
    "suggest_outfit",
    "generate_outfit",
    "get_outfit_suggestion",
    "is_usable_suggestion",
    "season_for_date",
    "save_suggestion",
]
