"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import (
    WILDCARD_SEASON,
    WardrobeValidationError,
    ensure_list,
    normalise_tags,
    optional_text,
    validate_category,
    validate_color,
    validate_iso_date,
    validate_occasion,
    validate_season,
    wear_count,
)


@dataclass
class ClothingItem:
    """Represents one physical garment in the wardrobe."""

    item_id: str
    name: str
    category: str
    image_uri: str = ""
    colors: List[str] = field(default_factory=list)
    seasons: List[str] = field(default_factory=list)
    occasions: List[str] = field(default_factory=list)
    brand: Optional[str] = None
    times_worn: int = 0
    last_worn: Optional[str] = None
    favorite: bool = False
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.name = str(self.name or "").strip()
        if not self.name:
            raise WardrobeValidationError("Clothing item name must not be empty")
        self.category = validate_category(self.category)
        self.image_uri = str(self.image_uri or "")
        self.colors = normalise_tags(ensure_list(self.colors), validate_color)
        self.seasons = normalise_tags(ensure_list(self.seasons), validate_season)
        self.occasions = normalise_tags(ensure_list(self.occasions), validate_occasion)
        self.times_worn = wear_count(self.times_worn)
        if self.last_worn is not None:
            self.last_worn = validate_iso_date(self.last_worn)
        self.favorite = bool(self.favorite)
        self.brand = optional_text(self.brand)
        self.notes = optional_text(self.notes)

    def is_in_season(self, season: str) -> bool:
        return season in self.seasons or WILDCARD_SEASON in self.seasons


def from_raw_metadata(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from loose snapshot or API metadata."""

    required_fields = ["item_id", "name", "category"]
    missing = [key for key in required_fields if not metadata.get(key)]
    if missing:
        raise WardrobeValidationError(f"Missing required fields for ClothingItem: {missing}")

    return ClothingItem(
        item_id=str(metadata["item_id"]),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        image_uri=str(metadata.get("image_uri") or ""),
        colors=ensure_list(metadata.get("colors")),
        seasons=ensure_list(metadata.get("seasons")),
        occasions=ensure_list(metadata.get("occasions")),
        brand=metadata.get("brand"),
        times_worn=metadata.get("times_worn") or 0,
        last_worn=metadata.get("last_worn"),
        favorite=bool(metadata.get("favorite", False)),
        notes=metadata.get("notes"),
    )


__all__ = ["ClothingItem", "from_raw_metadata"]
