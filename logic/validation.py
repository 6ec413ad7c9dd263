"""Pydantic schemas for snapshot payloads and HTTP request bodies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

SNAPSHOT_SCHEMA_VERSION = 1


class WardrobeSnapshot(BaseModel):
    """Serialized repository state persisted under a single storage slot."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(SNAPSHOT_SCHEMA_VERSION, alias="schemaVersion", ge=1)
    clothing_items: List[Dict[str, Any]] = Field(default_factory=list, alias="clothingItems")
    outfits: List[Dict[str, Any]] = Field(default_factory=list)
    planned_outfits: List[Dict[str, Any]] = Field(default_factory=list, alias="plannedOutfits")
    outfit_photos: List[str] = Field(default_factory=list, alias="outfitPhotos")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ClothingItemDraft(BaseModel):
    """Fields a caller may supply when cataloguing a garment."""

    name: str = Field(min_length=1)
    category: str
    image_uri: str = ""
    colors: List[str] = []
    seasons: List[str] = []
    occasions: List[str] = []
    brand: Optional[str] = None
    last_worn: Optional[str] = None
    favorite: bool = False
    notes: Optional[str] = None


class ClothingItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    image_uri: Optional[str] = None
    colors: Optional[List[str]] = None
    seasons: Optional[List[str]] = None
    occasions: Optional[List[str]] = None
    brand: Optional[str] = None
    last_worn: Optional[str] = None
    favorite: Optional[bool] = None
    notes: Optional[str] = None


class OutfitDraft(BaseModel):
    name: str = Field(min_length=1)
    items: List[str] = []
    occasion: str = "casual"
    seasons: List[str] = []
    favorite: bool = False
    last_worn: Optional[str] = None
    notes: Optional[str] = None


class OutfitUpdate(BaseModel):
    name: Optional[str] = None
    items: Optional[List[str]] = None
    occasion: Optional[str] = None
    seasons: Optional[List[str]] = None
    favorite: Optional[bool] = None
    notes: Optional[str] = None


class PlannedOutfitDraft(BaseModel):
    date: str
    outfit_id: str = Field(min_length=1)
    event: Optional[str] = None


class PlannedOutfitUpdate(BaseModel):
    date: Optional[str] = None
    outfit_id: Optional[str] = None
    event: Optional[str] = None


class OutfitPhotoRequest(BaseModel):
    uri: str = Field(min_length=1)


class SuggestionRequestModel(BaseModel):
    """HTTP body for a recommendation request; every field is optional."""

    occasion: Optional[str] = None
    season: Optional[str] = None
    weather: Optional[str] = None
    colors: List[str] = []
    mood: Optional[str] = None
    exclude_items: List[str] = []
    style_preference: Optional[str] = None
    save: bool = False
    name: Optional[str] = None
    current_season: bool = False


class ImageAnalysisRequest(BaseModel):
    image_uri: str = Field(min_length=1)


__all__ = [
    "SNAPSHOT_SCHEMA_VERSION",
    "WardrobeSnapshot",
    "ClothingItemDraft",
    "ClothingItemUpdate",
    "OutfitDraft",
    "OutfitUpdate",
    "PlannedOutfitDraft",
    "PlannedOutfitUpdate",
    "OutfitPhotoRequest",
    "SuggestionRequestModel",
    "ImageAnalysisRequest",
]
