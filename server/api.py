"""FastAPI server exposing the wardrobe repository and outfit suggestions."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from logic.validation import (
    ClothingItemDraft,
    ClothingItemUpdate,
    ImageAnalysisRequest,
    OutfitDraft,
    OutfitPhotoRequest,
    OutfitUpdate,
    PlannedOutfitDraft,
    PlannedOutfitUpdate,
    SuggestionRequestModel,
)
from models.taxonomy import WardrobeValidationError
from tools.image_analysis import draft_from_analysis
from wardrobe_app.app import WardrobeApp


def _not_found(kind: str, entity_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} '{entity_id}' not found")


def create_app(wardrobe: WardrobeApp | None = None) -> FastAPI:
    """Build the HTTP surface around one wardrobe app instance."""

    wardrobe = wardrobe or WardrobeApp()
    repository = wardrobe.repository
    app = FastAPI(title="Wardrobe Planner", version="0.1.0")
    app.state.wardrobe = wardrobe

    @app.exception_handler(WardrobeValidationError)
    async def _validation_error(_: Request, exc: WardrobeValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "wardrobe-planner",
            "environment": wardrobe.config.environment or "local",
            "snapshot_backend": wardrobe.config.snapshot_backend,
        }

    # -- clothing items -------------------------------------------------
    @app.get("/items")
    async def list_items(category: Optional[str] = None, favorites: bool = False) -> list:
        return [asdict(item) for item in repository.list_items(category=category, favorites_only=favorites)]

    @app.post("/items", status_code=201)
    async def add_item(draft: ClothingItemDraft) -> dict:
        return asdict(repository.add_clothing_item(draft.model_dump()))

    @app.get("/items/{item_id}")
    async def get_item(item_id: str) -> dict:
        item = repository.get_item_by_id(item_id)
        if item is None:
            raise _not_found("Item", item_id)
        return asdict(item)

    @app.patch("/items/{item_id}")
    async def update_item(item_id: str, updates: ClothingItemUpdate) -> dict:
        item = repository.update_clothing_item(item_id, updates.model_dump(exclude_unset=True))
        if item is None:
            raise _not_found("Item", item_id)
        return asdict(item)

    @app.delete("/items/{item_id}")
    async def remove_item(item_id: str) -> dict:
        if not repository.remove_clothing_item(item_id):
            raise _not_found("Item", item_id)
        return {"removed": item_id}

    @app.post("/items/{item_id}/favorite")
    async def toggle_favorite_item(item_id: str) -> dict:
        item = repository.toggle_favorite_item(item_id)
        if item is None:
            raise _not_found("Item", item_id)
        return asdict(item)

    @app.post("/items/{item_id}/wear")
    async def wear_item(item_id: str) -> dict:
        item = repository.increment_item_worn(item_id)
        if item is None:
            raise _not_found("Item", item_id)
        return asdict(item)

    # -- outfits --------------------------------------------------------
    @app.get("/outfits")
    async def list_outfits(favorites: bool = False) -> list:
        return [asdict(outfit) for outfit in repository.list_outfits(favorites_only=favorites)]

    @app.get("/outfits/recent")
    async def recent_outfits(limit: int = 5) -> list:
        return [asdict(outfit) for outfit in repository.recent_outfits(limit=limit)]

    @app.post("/outfits", status_code=201)
    async def add_outfit(draft: OutfitDraft) -> dict:
        return asdict(repository.add_outfit(draft.model_dump()))

    @app.get("/outfits/{outfit_id}")
    async def get_outfit(outfit_id: str) -> dict:
        outfit = repository.get_outfit_by_id(outfit_id)
        if outfit is None:
            raise _not_found("Outfit", outfit_id)
        return asdict(outfit)

    @app.get("/outfits/{outfit_id}/items")
    async def get_outfit_items(outfit_id: str) -> list:
        return [asdict(item) for item in repository.get_outfit_items(outfit_id)]

    @app.patch("/outfits/{outfit_id}")
    async def update_outfit(outfit_id: str, updates: OutfitUpdate) -> dict:
        outfit = repository.update_outfit(outfit_id, updates.model_dump(exclude_unset=True))
        if outfit is None:
            raise _not_found("Outfit", outfit_id)
        return asdict(outfit)

    @app.delete("/outfits/{outfit_id}")
    async def remove_outfit(outfit_id: str) -> dict:
        if not repository.remove_outfit(outfit_id):
            raise _not_found("Outfit", outfit_id)
        return {"removed": outfit_id}

    @app.post("/outfits/{outfit_id}/favorite")
    async def toggle_favorite_outfit(outfit_id: str) -> dict:
        outfit = repository.toggle_favorite_outfit(outfit_id)
        if outfit is None:
            raise _not_found("Outfit", outfit_id)
        return asdict(outfit)

    @app.post("/outfits/{outfit_id}/wear")
    async def wear_outfit(outfit_id: str) -> dict:
        outfit = repository.increment_outfit_worn(outfit_id)
        if outfit is None:
            raise _not_found("Outfit", outfit_id)
        return asdict(outfit)

    # -- photos ---------------------------------------------------------
    @app.get("/photos")
    async def list_photos() -> list:
        return repository.list_outfit_photos()

    @app.post("/photos", status_code=201)
    async def add_photo(request: OutfitPhotoRequest) -> list:
        return repository.add_outfit_photo(request.uri)

    @app.delete("/photos")
    async def remove_photo(uri: str) -> dict:
        if not repository.remove_outfit_photo(uri):
            raise HTTPException(status_code=404, detail="Photo not found")
        return {"removed": uri}

    # -- calendar -------------------------------------------------------
    @app.get("/plans")
    async def list_plans(date: Optional[str] = None) -> list:
        plans = repository.get_planned_outfits_by_date(date) if date else repository.list_planned_outfits()
        return [asdict(plan) for plan in plans]

    @app.post("/plans", status_code=201)
    async def plan_outfit(draft: PlannedOutfitDraft) -> dict:
        return asdict(repository.plan_outfit(draft.model_dump()))

    @app.get("/plans/{plan_id}")
    async def get_plan(plan_id: str) -> dict:
        plan = repository.get_planned_outfit_by_id(plan_id)
        if plan is None:
            raise _not_found("Plan", plan_id)
        return asdict(plan)

    @app.patch("/plans/{plan_id}")
    async def update_plan(plan_id: str, updates: PlannedOutfitUpdate) -> dict:
        plan = repository.update_planned_outfit(plan_id, updates.model_dump(exclude_unset=True))
        if plan is None:
            raise _not_found("Plan", plan_id)
        return asdict(plan)

    @app.delete("/plans/{plan_id}")
    async def remove_plan(plan_id: str) -> dict:
        if not repository.remove_planned_outfit(plan_id):
            raise _not_found("Plan", plan_id)
        return {"removed": plan_id}

    # -- suggestions and analysis ---------------------------------------
    @app.get("/stats")
    async def stats() -> dict:
        return repository.stats()

    @app.post("/recommendations")
    async def recommend(request: SuggestionRequestModel) -> dict:
        """Suggest an outfit and optionally save it when it is usable."""

        payload = request.model_dump(exclude={"save", "name", "current_season"})
        suggestion = wardrobe.suggest(payload, current_season=request.current_season)
        saved = None
        if request.save:
            outfit = wardrobe.save_suggestion(payload, suggestion, name=request.name)
            saved = asdict(outfit) if outfit else None
        items = [repository.get_item_by_id(item_id) for item_id in suggestion.item_ids]
        return {
            "item_ids": suggestion.item_ids,
            "items": [asdict(item) for item in items if item is not None],
            "usable": suggestion.usable,
            "saved_outfit": saved,
            "diagnostics": suggestion.diagnostics,
        }

    @app.post("/analysis/image")
    async def analyze_image(request: ImageAnalysisRequest) -> dict:
        analysis = wardrobe.analyzer.analyze(request.image_uri)
        return {
            "analysis": asdict(analysis),
            "draft": draft_from_analysis(analysis, name=analysis.caption, image_uri=request.image_uri),
        }

    return app


def get_app() -> FastAPI:
    """Expose a configured FastAPI instance for ASGI servers."""

    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
