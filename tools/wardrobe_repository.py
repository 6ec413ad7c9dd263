"""In-memory wardrobe repository with snapshot persistence.

The repository exclusively owns four collections: clothing items, outfits,
planned outfits and captured outfit photos. Every mutating operation rewrites
the whole snapshot through the configured :class:`SnapshotStore`; a failed write
is logged and never surfaces to the caller, so in-memory state stays
authoritative until the next successful write catches up.

Not-found is not an error here: updates, toggles and wear increments return
``None``, removals return ``False`` and lookups return ``None`` or ``[]``.
References between entities are soft. Removing an item leaves outfits that
mention it untouched and removing an outfit leaves its calendar plans in place;
read-side lookups skip whatever no longer resolves.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import asdict, fields
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

from pydantic import ValidationError

from logic.validation import SNAPSHOT_SCHEMA_VERSION, WardrobeSnapshot
from models.clothing_item import ClothingItem, from_raw_metadata
from models.outfit import Outfit, PlannedOutfit, outfit_from_raw, planned_outfit_from_raw
from models.seed_data import SEED_CLOTHING_ITEMS, SEED_OUTFITS, SEED_PLANNED_OUTFITS
from models.taxonomy import WardrobeValidationError, validate_category
from tools.observability import instrument_operation
from tools.snapshot_store import SnapshotCorruptError, SnapshotStore, SnapshotStoreError
from wardrobe_app.config import DEFAULT_STORAGE_SLOT
from wardrobe_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

_ITEM_FIELDS = {f.name for f in fields(ClothingItem)}
_OUTFIT_FIELDS = {f.name for f in fields(Outfit)}
_PLAN_FIELDS = {f.name for f in fields(PlannedOutfit)}

# wear counters and dates only move through the increment operations
_ITEM_PROTECTED = {"item_id", "times_worn", "last_worn"}
_OUTFIT_PROTECTED = {"outfit_id", "times_worn", "last_worn"}
_PLAN_PROTECTED = {"plan_id"}


def _default_id() -> str:
    return uuid4().hex


def _merge(current: object, updates: Mapping[str, Any], allowed: set, protected: set) -> Dict[str, Any]:
    merged = asdict(current)
    for key, value in updates.items():
        if key in protected or key not in allowed:
            continue
        merged[key] = value
    return merged


class WardrobeRepository:
    """Single source of truth for wardrobe state."""

    def __init__(
        self,
        store: Optional[SnapshotStore] = None,
        storage_slot: str = DEFAULT_STORAGE_SLOT,
        id_factory: Optional[Callable[[], str]] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.store = store
        self.storage_slot = storage_slot
        self._id_factory = id_factory or _default_id
        self._today = today or date.today
        self._clothing_items: List[ClothingItem] = []
        self._outfits: List[Outfit] = []
        self._planned_outfits: List[PlannedOutfit] = []
        self._outfit_photos: List[str] = []
        self._issued_ids: set = set()

    # ------------------------------------------------------------------
    # Startup and snapshots
    # ------------------------------------------------------------------
    @classmethod
    def load(
        cls,
        store: SnapshotStore,
        storage_slot: str = DEFAULT_STORAGE_SLOT,
        seed_on_first_run: bool = True,
        **kwargs: Any,
    ) -> "WardrobeRepository":
        """Restore repository state from ``store``.

        A missing snapshot is a fresh install: the repository starts from the
        reference wardrobe (or empty when seeding is disabled) and writes its
        first snapshot. A snapshot that exists but cannot be decoded raises
        :class:`SnapshotCorruptError` instead of silently starting over.
        """

        repository = cls(store=store, storage_slot=storage_slot, **kwargs)
        payload = store.read(storage_slot)
        if payload is None:
            if seed_on_first_run:
                repository.restore(
                    {
                        "schemaVersion": SNAPSHOT_SCHEMA_VERSION,
                        "clothingItems": SEED_CLOTHING_ITEMS,
                        "outfits": SEED_OUTFITS,
                        "plannedOutfits": SEED_PLANNED_OUTFITS,
                        "outfitPhotos": [],
                    }
                )
            log_event(
                LOGGER,
                logging.INFO,
                "snapshot_initialised",
                slot=storage_slot,
                seeded=seed_on_first_run,
                item_count=len(repository._clothing_items),
            )
            repository._persist()
            return repository

        repository.restore(payload)
        log_event(
            LOGGER,
            logging.INFO,
            "snapshot_loaded",
            slot=storage_slot,
            item_count=len(repository._clothing_items),
            outfit_count=len(repository._outfits),
        )
        return repository

    def restore(self, payload: Mapping[str, Any]) -> None:
        """Replace all four collections from a serialized snapshot."""

        try:
            snapshot = WardrobeSnapshot.model_validate(dict(payload))
        except ValidationError as exc:
            raise SnapshotCorruptError(f"Snapshot '{self.storage_slot}' has an invalid shape: {exc}") from exc
        if snapshot.schema_version > SNAPSHOT_SCHEMA_VERSION:
            raise SnapshotCorruptError(
                f"Snapshot schema version {snapshot.schema_version} is newer than supported "
                f"version {SNAPSHOT_SCHEMA_VERSION}"
            )
        try:
            clothing_items = [from_raw_metadata(raw) for raw in snapshot.clothing_items]
            outfits = [outfit_from_raw(raw) for raw in snapshot.outfits]
            planned = [planned_outfit_from_raw(raw) for raw in snapshot.planned_outfits]
        except (WardrobeValidationError, TypeError, ValueError) as exc:
            raise SnapshotCorruptError(f"Snapshot '{self.storage_slot}' holds an invalid entity: {exc}") from exc

        self._clothing_items = clothing_items
        self._outfits = outfits
        self._planned_outfits = planned
        self._outfit_photos = list(snapshot.outfit_photos)
        self._issued_ids = (
            {item.item_id for item in clothing_items}
            | {outfit.outfit_id for outfit in outfits}
            | {plan.plan_id for plan in planned}
        )

    def to_snapshot(self) -> WardrobeSnapshot:
        return WardrobeSnapshot(
            schema_version=SNAPSHOT_SCHEMA_VERSION,
            clothing_items=[asdict(item) for item in self._clothing_items],
            outfits=[asdict(outfit) for outfit in self._outfits],
            planned_outfits=[asdict(plan) for plan in self._planned_outfits],
            outfit_photos=list(self._outfit_photos),
        )

    def _persist(self) -> None:
        if self.store is None:
            return
        try:
            self.store.write(self.storage_slot, self.to_snapshot().to_payload())
        except SnapshotStoreError as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "snapshot_write_failed",
                slot=self.storage_slot,
                error=str(exc),
            )

    def _new_id(self) -> str:
        new_id = str(self._id_factory())
        while new_id in self._issued_ids:
            new_id = str(self._id_factory())
        self._issued_ids.add(new_id)
        return new_id

    def _today_iso(self) -> str:
        return self._today().isoformat()

    # ------------------------------------------------------------------
    # Clothing items
    # ------------------------------------------------------------------
    def _find_item(self, item_id: str) -> Optional[ClothingItem]:
        return next((item for item in self._clothing_items if item.item_id == item_id), None)

    @instrument_operation("add_clothing_item")
    def add_clothing_item(self, draft: Mapping[str, Any]) -> ClothingItem:
        payload = {key: value for key, value in draft.items() if key in _ITEM_FIELDS}
        payload.update(item_id=self._new_id(), times_worn=0)
        item = ClothingItem(**payload)
        self._clothing_items.append(item)
        self._persist()
        return copy.deepcopy(item)

    @instrument_operation("update_clothing_item")
    def update_clothing_item(self, item_id: str, updates: Mapping[str, Any]) -> Optional[ClothingItem]:
        current = self._find_item(item_id)
        if current is None:
            return None
        validated = ClothingItem(**_merge(current, updates, _ITEM_FIELDS, _ITEM_PROTECTED))
        self._clothing_items[self._clothing_items.index(current)] = validated
        self._persist()
        return copy.deepcopy(validated)

    @instrument_operation("remove_clothing_item")
    def remove_clothing_item(self, item_id: str) -> bool:
        remaining = [item for item in self._clothing_items if item.item_id != item_id]
        if len(remaining) == len(self._clothing_items):
            return False
        self._clothing_items = remaining
        self._persist()
        return True

    @instrument_operation("toggle_favorite_item")
    def toggle_favorite_item(self, item_id: str) -> Optional[ClothingItem]:
        item = self._find_item(item_id)
        if item is None:
            return None
        item.favorite = not item.favorite
        self._persist()
        return copy.deepcopy(item)

    def _increment_item(self, item_id: str, worn_on: str) -> Optional[ClothingItem]:
        item = self._find_item(item_id)
        if item is None:
            return None
        item.times_worn += 1
        item.last_worn = worn_on
        return item

    @instrument_operation("increment_item_worn")
    def increment_item_worn(self, item_id: str) -> Optional[ClothingItem]:
        item = self._increment_item(item_id, self._today_iso())
        if item is None:
            return None
        self._persist()
        return copy.deepcopy(item)

    # ------------------------------------------------------------------
    # Outfits
    # ------------------------------------------------------------------
    def _find_outfit(self, outfit_id: str) -> Optional[Outfit]:
        return next((outfit for outfit in self._outfits if outfit.outfit_id == outfit_id), None)

    @instrument_operation("add_outfit")
    def add_outfit(self, draft: Mapping[str, Any]) -> Outfit:
        payload = {key: value for key, value in draft.items() if key in _OUTFIT_FIELDS}
        payload.update(outfit_id=self._new_id(), times_worn=0)
        outfit = Outfit(**payload)
        self._outfits.append(outfit)
        self._persist()
        return copy.deepcopy(outfit)

    @instrument_operation("update_outfit")
    def update_outfit(self, outfit_id: str, updates: Mapping[str, Any]) -> Optional[Outfit]:
        current = self._find_outfit(outfit_id)
        if current is None:
            return None
        validated = Outfit(**_merge(current, updates, _OUTFIT_FIELDS, _OUTFIT_PROTECTED))
        self._outfits[self._outfits.index(current)] = validated
        self._persist()
        return copy.deepcopy(validated)

    @instrument_operation("remove_outfit")
    def remove_outfit(self, outfit_id: str) -> bool:
        remaining = [outfit for outfit in self._outfits if outfit.outfit_id != outfit_id]
        if len(remaining) == len(self._outfits):
            return False
        self._outfits = remaining
        self._persist()
        return True

    @instrument_operation("toggle_favorite_outfit")
    def toggle_favorite_outfit(self, outfit_id: str) -> Optional[Outfit]:
        outfit = self._find_outfit(outfit_id)
        if outfit is None:
            return None
        outfit.favorite = not outfit.favorite
        self._persist()
        return copy.deepcopy(outfit)

    @instrument_operation("increment_outfit_worn")
    def increment_outfit_worn(self, outfit_id: str) -> Optional[Outfit]:
        """Record that an outfit was worn today.

        Bumps the outfit's own counter and then every referenced item's counter,
        all stamped with the same date. Ids that no longer resolve are skipped.
        """

        outfit = self._find_outfit(outfit_id)
        if outfit is None:
            return None
        worn_on = self._today_iso()
        outfit.times_worn += 1
        outfit.last_worn = worn_on
        for item_id in outfit.items:
            self._increment_item(item_id, worn_on)
        self._persist()
        return copy.deepcopy(outfit)

    # ------------------------------------------------------------------
    # Outfit photos
    # ------------------------------------------------------------------
    @instrument_operation("add_outfit_photo")
    def add_outfit_photo(self, uri: str) -> List[str]:
        self._outfit_photos.append(str(uri))
        self._persist()
        return list(self._outfit_photos)

    @instrument_operation("remove_outfit_photo")
    def remove_outfit_photo(self, uri: str) -> bool:
        remaining = [photo for photo in self._outfit_photos if photo != uri]
        if len(remaining) == len(self._outfit_photos):
            return False
        self._outfit_photos = remaining
        self._persist()
        return True

    # ------------------------------------------------------------------
    # Planned outfits
    # ------------------------------------------------------------------
    def _find_plan(self, plan_id: str) -> Optional[PlannedOutfit]:
        return next((plan for plan in self._planned_outfits if plan.plan_id == plan_id), None)

    @instrument_operation("plan_outfit")
    def plan_outfit(self, draft: Mapping[str, Any]) -> PlannedOutfit:
        payload = {key: value for key, value in draft.items() if key in _PLAN_FIELDS}
        payload["plan_id"] = self._new_id()
        plan = PlannedOutfit(**payload)
        self._planned_outfits.append(plan)
        self._persist()
        return copy.deepcopy(plan)

    @instrument_operation("update_planned_outfit")
    def update_planned_outfit(self, plan_id: str, updates: Mapping[str, Any]) -> Optional[PlannedOutfit]:
        current = self._find_plan(plan_id)
        if current is None:
            return None
        validated = PlannedOutfit(**_merge(current, updates, _PLAN_FIELDS, _PLAN_PROTECTED))
        self._planned_outfits[self._planned_outfits.index(current)] = validated
        self._persist()
        return copy.deepcopy(validated)

    @instrument_operation("remove_planned_outfit")
    def remove_planned_outfit(self, plan_id: str) -> bool:
        remaining = [plan for plan in self._planned_outfits if plan.plan_id != plan_id]
        if len(remaining) == len(self._planned_outfits):
            return False
        self._planned_outfits = remaining
        self._persist()
        return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_item_by_id(self, item_id: str) -> Optional[ClothingItem]:
        item = self._find_item(item_id)
        return copy.deepcopy(item) if item else None

    def get_outfit_by_id(self, outfit_id: str) -> Optional[Outfit]:
        outfit = self._find_outfit(outfit_id)
        return copy.deepcopy(outfit) if outfit else None

    def get_planned_outfit_by_id(self, plan_id: str) -> Optional[PlannedOutfit]:
        plan = self._find_plan(plan_id)
        return copy.deepcopy(plan) if plan else None

    def get_planned_outfits_by_date(self, day: str | date) -> List[PlannedOutfit]:
        key = day.isoformat() if isinstance(day, date) else day
        return [copy.deepcopy(plan) for plan in self._planned_outfits if plan.date == key]

    def get_outfit_items(self, outfit_id: str) -> List[ClothingItem]:
        outfit = self._find_outfit(outfit_id)
        if outfit is None:
            return []
        resolved = (self._find_item(item_id) for item_id in outfit.items)
        return [copy.deepcopy(item) for item in resolved if item is not None]

    def list_items(self, category: Optional[str] = None, favorites_only: bool = False) -> List[ClothingItem]:
        items: Iterable[ClothingItem] = self._clothing_items
        if category:
            try:
                category_key = validate_category(category)
            except WardrobeValidationError:
                return []
            items = [item for item in items if item.category == category_key]
        if favorites_only:
            items = [item for item in items if item.favorite]
        return [copy.deepcopy(item) for item in items]

    def list_outfits(self, favorites_only: bool = False) -> List[Outfit]:
        return [copy.deepcopy(o) for o in self._outfits if o.favorite or not favorites_only]

    def list_planned_outfits(self) -> List[PlannedOutfit]:
        return [copy.deepcopy(plan) for plan in self._planned_outfits]

    def list_outfit_photos(self) -> List[str]:
        return list(self._outfit_photos)

    def recent_outfits(self, limit: int = 5) -> List[Outfit]:
        """Outfits by most recent wear; never-worn outfits sort last."""

        worn = sorted((o for o in self._outfits if o.last_worn), key=lambda o: o.last_worn, reverse=True)
        never_worn = [o for o in self._outfits if not o.last_worn]
        return [copy.deepcopy(outfit) for outfit in (worn + never_worn)[:limit]]

    def stats(self) -> Dict[str, int]:
        return {
            "item_count": len(self._clothing_items),
            "outfit_count": len(self._outfits),
            "planned_count": len(self._planned_outfits),
            "photo_count": len(self._outfit_photos),
            "total_wears": sum(item.times_worn for item in self._clothing_items),
            "favorite_items": sum(1 for item in self._clothing_items if item.favorite),
            "favorite_outfits": sum(1 for outfit in self._outfits if outfit.favorite),
        }


__all__ = ["WardrobeRepository"]
