"""Canonical vocabularies for clothing items, outfits and calendar plans.

This module centralises the closed label sets (categories, colors, seasons and
occasions). Helper functions keep write-side validation consistent across the
repository, the recommendation engine and the HTTP surface.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional


class WardrobeValidationError(ValueError):
    """Raised when a value falls outside the wardrobe vocabulary."""


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a vocabulary key."""

    return str(value).strip().lower().replace(" ", "_")


CATEGORIES: List[str] = ["tops", "bottoms", "outerwear", "dresses", "shoes", "accessories"]

COLORS: List[str] = [
    "black",
    "white",
    "gray",
    "beige",
    "brown",
    "navy",
    "blue",
    "green",
    "red",
    "pink",
    "purple",
    "yellow",
    "orange",
    "multicolor",
]

SEASONS: List[str] = ["spring", "summer", "fall", "winter", "all"]
WILDCARD_SEASON = "all"

OCCASIONS: List[str] = ["casual", "work", "formal", "athletic", "special"]

CATEGORY_ALIASES: Dict[str, str] = {
    "top": "tops",
    "bottom": "bottoms",
    "dress": "dresses",
    "shoe": "shoes",
    "accessory": "accessories",
}

COLOR_MAP: Dict[str, str] = {
    "grey": "gray",
    "navy_blue": "navy",
    "light_blue": "blue",
    "sky_blue": "blue",
    "off_white": "white",
    "cream": "beige",
    "tan": "beige",
    "olive": "green",
    "burgundy": "red",
    "multi": "multicolor",
}

SEASON_ALIASES: Dict[str, str] = {"autumn": "fall", "all_year": "all"}


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`WardrobeValidationError` if the category is not part of the
    canonical vocabulary.
    """

    key = _normalize_key(value)
    key = CATEGORY_ALIASES.get(key, key)
    if key not in CATEGORIES:
        raise WardrobeValidationError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return key


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical color name."""

    key = _normalize_key(raw_string)
    return COLOR_MAP.get(key, key)


def validate_color(value: str) -> str:
    key = normalize_color_name(value)
    if key not in COLORS:
        raise WardrobeValidationError(f"Unsupported color '{value}'. Allowed: {COLORS}")
    return key


def normalize_season_name(raw_string: str) -> str:
    key = _normalize_key(raw_string)
    return SEASON_ALIASES.get(key, key)


def validate_season(value: str) -> str:
    key = normalize_season_name(value)
    if key not in SEASONS:
        raise WardrobeValidationError(f"Unsupported season '{value}'. Allowed: {SEASONS}")
    return key


def validate_occasion(value: str) -> str:
    key = _normalize_key(value)
    if key not in OCCASIONS:
        raise WardrobeValidationError(f"Unsupported occasion '{value}'. Allowed: {OCCASIONS}")
    return key


def validate_iso_date(value: object) -> str:
    """Return the ISO ``YYYY-MM-DD`` form of a calendar date."""

    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError as exc:
        raise WardrobeValidationError(f"Invalid calendar date '{value}', expected YYYY-MM-DD") from exc


def ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list; a bare string is one value."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def optional_text(value: Any) -> Optional[str]:
    """Free-text fields are stored as strings; blank means absent."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def wear_count(value: Any) -> int:
    """Validate a non-negative wear counter."""

    try:
        count = int(value or 0)
    except (TypeError, ValueError) as exc:
        raise WardrobeValidationError(f"times_worn must be an integer, got {value!r}") from exc
    if count < 0:
        raise WardrobeValidationError("times_worn must be non-negative")
    return count


def normalise_tags(values: Iterable[str], validator) -> List[str]:
    """Validate and deduplicate tags, preserving first-seen order."""

    normalised = []
    seen = set()
    for value in values:
        key = validator(value)
        if key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "CATEGORIES",
    "COLORS",
    "SEASONS",
    "WILDCARD_SEASON",
    "OCCASIONS",
    "WardrobeValidationError",
    "validate_category",
    "validate_color",
    "validate_season",
    "validate_occasion",
    "validate_iso_date",
    "normalize_color_name",
    "normalize_season_name",
    "normalise_tags",
    "ensure_list",
    "optional_text",
    "wear_count",
]
