"""Image analysis collaborator contract and an offline keyword analyzer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from models.taxonomy import COLORS
from wardrobe_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

_CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...], str]] = [
    ("tops", ("shirt", "tee", "top"), "top"),
    ("bottoms", ("pant", "jean", "trouser"), "pair of pants"),
    ("dresses", ("dress",), "dress"),
    ("outerwear", ("jacket", "coat", "sweater"), "outerwear piece"),
    ("shoes", ("shoe", "boot", "sneaker"), "pair of shoes"),
    ("accessories", ("hat", "bag", "accessory"), "accessory"),
]
_STYLE_WORDS = ("casual", "formal", "sporty", "elegant", "vintage", "modern")
DEFAULT_CATEGORY = "tops"
DEFAULT_STYLE = "casual"


@dataclass
class ImageAnalysis:
    """Best guess about a garment photo.

    Only ``category`` and ``colors`` feed the wardrobe; ``style`` and
    ``caption`` are passed through for display.
    """

    category: str
    colors: List[str] = field(default_factory=list)
    style: Optional[str] = None
    caption: str = "A stylish clothing item"


class ImageAnalyzer(ABC):
    """Abstract image analysis service."""

    @abstractmethod
    def analyze(self, image_uri: str) -> ImageAnalysis:
        """Return a category/color/style guess for the image."""


class KeywordImageAnalyzer(ImageAnalyzer):
    """Offline analyzer that reads hints from the image file name."""

    def analyze(self, image_uri: str) -> ImageAnalysis:
        path = urlparse(image_uri).path or image_uri
        filename = PurePosixPath(path).name.lower()

        category, noun = DEFAULT_CATEGORY, "top"
        for candidate, keywords, label in _CATEGORY_KEYWORDS:
            if any(keyword in filename for keyword in keywords):
                category, noun = candidate, label
                break

        # "multicolor" is never spelled out in file names
        colors = [color for color in COLORS if color != "multicolor" and color in filename]
        style = next((word for word in _STYLE_WORDS if word in filename), DEFAULT_STYLE)

        descriptor = " ".join(part for part in (colors[0] if colors else "", style) if part)
        caption = f"A {descriptor} {noun}"
        log_event(LOGGER, logging.INFO, "image_analyzed", category=category, color_count=len(colors), style=style)
        return ImageAnalysis(category=category, colors=colors, style=style, caption=caption)


def draft_from_analysis(analysis: ImageAnalysis, name: str, image_uri: str) -> Dict[str, Any]:
    """Pre-populate a clothing-item draft from an analysis result."""

    return {
        "name": name,
        "category": analysis.category,
        "image_uri": image_uri,
        "colors": list(analysis.colors),
        "seasons": [],
        "occasions": [],
        "favorite": False,
    }


__all__ = ["ImageAnalysis", "ImageAnalyzer", "KeywordImageAnalyzer", "draft_from_analysis"]
