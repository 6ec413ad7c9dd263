"""Outfit and calendar plan schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import (
    WardrobeValidationError,
    ensure_list,
    normalise_tags,
    optional_text,
    validate_iso_date,
    validate_occasion,
    validate_season,
    wear_count,
)


@dataclass
class Outfit:
    """A named, reusable bundle of clothing items.

    ``items`` keeps the order in which pieces were supplied; position carries
    slot meaning (top or dress first, then bottom, outerwear, shoes, accessories).
    """

    outfit_id: str
    name: str
    items: List[str] = field(default_factory=list)
    occasion: str = "casual"
    seasons: List[str] = field(default_factory=list)
    favorite: bool = False
    times_worn: int = 0
    last_worn: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.name = str(self.name or "").strip()
        if not self.name:
            raise WardrobeValidationError("Outfit name must not be empty")
        self.items = [str(item_id) for item_id in ensure_list(self.items)]
        self.occasion = validate_occasion(self.occasion)
        self.seasons = normalise_tags(ensure_list(self.seasons), validate_season)
        self.favorite = bool(self.favorite)
        self.times_worn = wear_count(self.times_worn)
        if self.last_worn is not None:
            self.last_worn = validate_iso_date(self.last_worn)
        self.notes = optional_text(self.notes)


@dataclass
class PlannedOutfit:
    """Binds one outfit to one calendar date."""

    plan_id: str
    date: str
    outfit_id: str
    event: Optional[str] = None

    def __post_init__(self) -> None:
        self.date = validate_iso_date(self.date)
        self.outfit_id = str(self.outfit_id or "")
        if not self.outfit_id:
            raise WardrobeValidationError("Planned outfit requires an outfit_id")
        self.event = optional_text(self.event)


def outfit_from_raw(metadata: Dict[str, Any]) -> Outfit:
    if not metadata.get("outfit_id"):
        raise WardrobeValidationError("Missing required field for Outfit: outfit_id")
    return Outfit(
        outfit_id=str(metadata["outfit_id"]),
        name=str(metadata.get("name") or ""),
        items=metadata.get("items"),
        occasion=str(metadata.get("occasion") or "casual"),
        seasons=metadata.get("seasons"),
        favorite=bool(metadata.get("favorite", False)),
        times_worn=metadata.get("times_worn") or 0,
        last_worn=metadata.get("last_worn"),
        notes=metadata.get("notes"),
    )


def planned_outfit_from_raw(metadata: Dict[str, Any]) -> PlannedOutfit:
    if not metadata.get("plan_id"):
        raise WardrobeValidationError("Missing required field for PlannedOutfit: plan_id")
    return PlannedOutfit(
        plan_id=str(metadata["plan_id"]),
        date=metadata.get("date", ""),
        outfit_id=str(metadata.get("outfit_id") or ""),
        event=metadata.get("event"),
    )


__all__ = ["Outfit", "PlannedOutfit", "outfit_from_raw", "planned_outfit_from_raw"]
