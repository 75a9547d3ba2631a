"""Endpoints for importing files and managing stored photos."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["sync"])


async def _read_upload(request: Request) -> bytes:
    container: AppContainer = request.app.state.container
    content = await request.body()
    if len(content) > container.settings.max_import_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Empty import file"
        )
    return content


@router.post("/import")
async def import_file(request: Request, filename: str = "") -> dict[str, object]:
    """Import a ZIP archive, analysis or meal plan from the raw request body."""
    container: AppContainer = request.app.state.container
    content = await _read_upload(request)
    outcome = await container.import_service.import_file(filename, content)
    return asdict(outcome)


@router.post("/import/analysis")
async def import_analysis(request: Request) -> dict[str, object]:
    """Import an analysis JSON file."""
    container: AppContainer = request.app.state.container
    day = await container.import_service.import_analysis_file(
        await _read_upload(request)
    )
    return {"date": day}


@router.post("/import/meal-plan")
async def import_meal_plan(request: Request) -> dict[str, object]:
    """Import a meal plan JSON file."""
    container: AppContainer = request.app.state.container
    plan = await container.import_service.import_meal_plan_file(
        await _read_upload(request)
    )
    return {"generatedDate": plan["generatedDate"]}


@router.get("/storage")
async def storage_info(request: Request) -> dict[str, object]:
    """Return photo counts per sync status and total size."""
    container: AppContainer = request.app.state.container
    return asdict(await container.storage_service.get_storage_info())


@router.delete("/storage/processed-photos")
async def clear_processed_photos(request: Request) -> dict[str, int]:
    """Delete processed meal photos."""
    container: AppContainer = request.app.state.container
    return {"deleted": await container.storage_service.clear_processed_photos()}


@router.get("/meal-plan")
async def meal_plan(request: Request) -> dict[str, object]:
    """Return the current meal plan."""
    container: AppContainer = request.app.state.container
    plan = await container.goals_service.get_meal_plan()
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return plan


@router.get("/profile/{key}")
async def get_profile(key: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"key": key, "value": await container.store.get_profile(key)}


@router.put("/profile/{key}")
async def set_profile(key: str, request: Request) -> dict[str, object]:
    """Replace a profile value with the JSON request body."""
    container: AppContainer = request.app.state.container
    value = await request.json()
    await container.store.set_profile(key, value)
    return {"key": key, "value": value}
