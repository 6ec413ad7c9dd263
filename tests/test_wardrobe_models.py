"""Vocabulary, clothing item and outfit model tests."""

from __future__ import annotations

from typing import Dict

import pytest

from models import taxonomy
from models.clothing_item import ClothingItem, from_raw_metadata
from models.outfit import Outfit, PlannedOutfit, outfit_from_raw
from models.taxonomy import WardrobeValidationError


@pytest.fixture()
def sample_metadata() -> Dict[str, object]:
    return {
        "item_id": "item-1",
        "name": "Navy Blazer",
        "category": "Outerwear",
        "image_uri": "https://example.com/blazer.jpg",
        "colors": ["navy blue", "White"],
        "seasons": ["Autumn", "winter"],
        "occasions": ["Work"],
        "brand": "Example",
        "notes": "A smart navy blazer.",
    }


def test_vocabularies_are_closed_sets() -> None:
    assert taxonomy.CATEGORIES == ["tops", "bottoms", "outerwear", "dresses", "shoes", "accessories"]
    assert "multicolor" in taxonomy.COLORS and len(taxonomy.COLORS) == 14
    assert taxonomy.SEASONS[-1] == taxonomy.WILDCARD_SEASON == "all"
    assert set(taxonomy.OCCASIONS) == {"casual", "work", "formal", "athletic", "special"}


def test_validators_normalise_aliases_and_reject_unknown_values() -> None:
    assert taxonomy.validate_category("Dress") == "dresses"
    assert taxonomy.validate_color("grey") == "gray"
    assert taxonomy.validate_season("autumn") == "fall"
    assert taxonomy.validate_occasion(" Formal ") == "formal"

    with pytest.raises(WardrobeValidationError):
        taxonomy.validate_category("hats")
    with pytest.raises(WardrobeValidationError):
        taxonomy.validate_color("chartreuse")
    with pytest.raises(WardrobeValidationError):
        taxonomy.validate_season("monsoon")
    with pytest.raises(WardrobeValidationError):
        taxonomy.validate_occasion("brunch")


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        taxonomy.validate_category("unknown")


def test_validate_iso_date() -> None:
    assert taxonomy.validate_iso_date("2025-05-27") == "2025-05-27"
    with pytest.raises(WardrobeValidationError):
        taxonomy.validate_iso_date("27/05/2025")


def test_clothing_item_construction(sample_metadata: Dict[str, object]) -> None:
    """ClothingItem enforces the vocabulary and normalises values."""

    item = ClothingItem(**sample_metadata)
    assert item.category == "outerwear"
    assert item.colors == ["navy", "white"]
    assert item.seasons == ["fall", "winter"]
    assert item.occasions == ["work"]
    assert item.times_worn == 0
    assert item.last_worn is None
    assert item.favorite is False


def test_clothing_item_rejects_empty_name_and_negative_wears(sample_metadata: Dict[str, object]) -> None:
    with pytest.raises(WardrobeValidationError):
        ClothingItem(**{**sample_metadata, "name": "  "})
    with pytest.raises(WardrobeValidationError):
        ClothingItem(**{**sample_metadata, "times_worn": -1})


def test_wildcard_season_matches_every_season(sample_metadata: Dict[str, object]) -> None:
    all_year = ClothingItem(**{**sample_metadata, "seasons": ["all"]})
    winter_only = ClothingItem(**{**sample_metadata, "seasons": ["winter"]})

    assert all_year.is_in_season("summer")
    assert winter_only.is_in_season("winter")
    assert not winter_only.is_in_season("summer")


def test_from_raw_metadata_sets_defaults(sample_metadata: Dict[str, object]) -> None:
    raw = sample_metadata.copy()
    raw.pop("colors")
    raw.pop("seasons")
    item = from_raw_metadata(raw)
    assert item.colors == []
    assert item.seasons == []

    with pytest.raises(WardrobeValidationError):
        from_raw_metadata({"item_id": "x", "category": "tops"})


def test_outfit_keeps_item_order_and_validates_occasion() -> None:
    outfit = Outfit(outfit_id="o1", name="Layered", items=["3", "1", "2"], occasion="Work", seasons=["all"])
    assert outfit.items == ["3", "1", "2"]
    assert outfit.occasion == "work"

    with pytest.raises(WardrobeValidationError):
        Outfit(outfit_id="o2", name="Odd", occasion="brunch")
    with pytest.raises(WardrobeValidationError):
        outfit_from_raw({"name": "No id"})


def test_planned_outfit_normalises_date() -> None:
    plan = PlannedOutfit(plan_id="p1", date="2025-05-27", outfit_id="o1", event="Presentation")
    assert plan.date == "2025-05-27"

    with pytest.raises(WardrobeValidationError):
        PlannedOutfit(plan_id="p2", date="tomorrow", outfit_id="o1")
    with pytest.raises(WardrobeValidationError):
        PlannedOutfit(plan_id="p3", date="2025-05-27", outfit_id="")


def test_outfit_accepts_single_season_string() -> None:
    outfit = Outfit(outfit_id="o3", name="Beach", seasons="Summer", items="4")

    assert outfit.seasons == ["summer"]
    assert outfit.items == ["4"]
    assert outfit_from_raw({"outfit_id": "o4", "name": "Rain", "seasons": "autumn"}).seasons == ["fall"]


def test_free_text_and_wear_counts_are_coerced(sample_metadata: Dict[str, object]) -> None:
    item = ClothingItem(**{**sample_metadata, "brand": 7, "notes": "   ", "times_worn": "3"})
    assert item.brand == "7"
    assert item.notes is None
    assert item.times_worn == 3

    with pytest.raises(WardrobeValidationError):
        ClothingItem(**{**sample_metadata, "times_worn": "abc"})
    with pytest.raises(WardrobeValidationError):
        Outfit(outfit_id="o5", name="Odd", times_worn=[1])


def test_planned_outfit_event_is_text() -> None:
    plan = PlannedOutfit(plan_id="p2", date="2025-05-29", outfit_id="o1", event=2025)
    assert plan.event == "2025"
