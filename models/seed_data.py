"""Reference wardrobe used to populate a fresh install."""

from __future__ import annotations

from typing import Dict, List

_UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&w=800&q=80"

SEED_CLOTHING_ITEMS: List[Dict[str, object]] = [
    {
        "item_id": "1",
        "name": "White T-Shirt",
        "category": "tops",
        "image_uri": _UNSPLASH.format("photo-1521572163474-6864f9cf17ab"),
        "colors": ["white"],
        "seasons": ["spring", "summer", "fall"],
        "occasions": ["casual"],
        "brand": "Uniqlo",
        "times_worn": 12,
        "last_worn": "2025-05-20",
        "favorite": True,
        "notes": "Super comfortable basic tee",
    },
    {
        "item_id": "2",
        "name": "Blue Jeans",
        "category": "bottoms",
        "image_uri": _UNSPLASH.format("photo-1542272604-787c3835535d"),
        "colors": ["blue"],
        "seasons": ["all"],
        "occasions": ["casual"],
        "brand": "Levi's",
        "times_worn": 25,
        "last_worn": "2025-05-22",
        "favorite": True,
        "notes": "Classic 501s",
    },
    {
        "item_id": "3",
        "name": "Black Blazer",
        "category": "outerwear",
        "image_uri": _UNSPLASH.format("photo-1591047139829-d91aecb6caea"),
        "colors": ["black"],
        "seasons": ["fall", "winter", "spring"],
        "occasions": ["work", "formal"],
        "brand": "Zara",
        "times_worn": 8,
        "last_worn": "2025-05-15",
        "favorite": False,
    },
    {
        "item_id": "4",
        "name": "Floral Dress",
        "category": "dresses",
        "image_uri": _UNSPLASH.format("photo-1572804013309-59a88b7e92f1"),
        "colors": ["multicolor"],
        "seasons": ["spring", "summer"],
        "occasions": ["casual", "special"],
        "brand": "H&M",
        "times_worn": 3,
        "last_worn": "2025-04-10",
        "favorite": True,
    },
    {
        "item_id": "5",
        "name": "White Sneakers",
        "category": "shoes",
        "image_uri": _UNSPLASH.format("photo-1549298916-b41d501d3772"),
        "colors": ["white"],
        "seasons": ["all"],
        "occasions": ["casual", "athletic"],
        "brand": "Nike",
        "times_worn": 30,
        "last_worn": "2025-05-25",
        "favorite": True,
    },
    {
        "item_id": "6",
        "name": "Black Dress Shoes",
        "category": "shoes",
        "image_uri": _UNSPLASH.format("photo-1543163521-1bf539c55dd2"),
        "colors": ["black"],
        "seasons": ["all"],
        "occasions": ["work", "formal"],
        "brand": "Cole Haan",
        "times_worn": 10,
        "last_worn": "2025-05-18",
        "favorite": False,
    },
    {
        "item_id": "7",
        "name": "Beige Sweater",
        "category": "tops",
        "image_uri": _UNSPLASH.format("photo-1576871337622-98d48d1cf531"),
        "colors": ["beige"],
        "seasons": ["fall", "winter"],
        "occasions": ["casual", "work"],
        "brand": "Madewell",
        "times_worn": 15,
        "last_worn": "2025-03-10",
        "favorite": True,
    },
    {
        "item_id": "8",
        "name": "Black Leather Jacket",
        "category": "outerwear",
        "image_uri": _UNSPLASH.format("photo-1551028719-00167b16eac5"),
        "colors": ["black"],
        "seasons": ["fall", "winter", "spring"],
        "occasions": ["casual"],
        "brand": "AllSaints",
        "times_worn": 20,
        "last_worn": "2025-04-15",
        "favorite": True,
    },
]

SEED_OUTFITS: List[Dict[str, object]] = [
    {
        "outfit_id": "1",
        "name": "Casual Weekend",
        "items": ["1", "2", "5"],
        "occasion": "casual",
        "seasons": ["spring", "summer", "fall"],
        "favorite": True,
        "last_worn": "2025-05-22",
        "times_worn": 5,
        "notes": "Go-to weekend outfit",
    },
    {
        "outfit_id": "2",
        "name": "Business Meeting",
        "items": ["3", "2", "6"],
        "occasion": "work",
        "seasons": ["fall", "winter", "spring"],
        "favorite": False,
        "last_worn": "2025-05-15",
        "times_worn": 3,
    },
    {
        "outfit_id": "3",
        "name": "Summer Party",
        "items": ["4", "5"],
        "occasion": "special",
        "seasons": ["summer"],
        "favorite": True,
        "last_worn": "2025-04-10",
        "times_worn": 1,
    },
    {
        "outfit_id": "4",
        "name": "Fall Casual",
        "items": ["7", "2", "5"],
        "occasion": "casual",
        "seasons": ["fall"],
        "favorite": True,
        "last_worn": "2025-03-10",
        "times_worn": 4,
    },
]

SEED_PLANNED_OUTFITS: List[Dict[str, object]] = [
    {"plan_id": "1", "date": "2025-05-27", "outfit_id": "2", "event": "Work Presentation"},
    {"plan_id": "2", "date": "2025-05-29", "outfit_id": "3", "event": "Dinner with Friends"},
    {"plan_id": "3", "date": "2025-05-31", "outfit_id": "1", "event": "Weekend Errands"},
]


__all__ = ["SEED_CLOTHING_ITEMS", "SEED_OUTFITS", "SEED_PLANNED_OUTFITS"]
