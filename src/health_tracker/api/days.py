"""Endpoints for logging entries and reading days."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from health_tracker.api.models import EntryCreate, SummaryUpdate, WaterAdd

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["days"])


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_entry(payload: EntryCreate, request: Request) -> dict[str, object]:
    """Log a new entry with an optional photo."""
    container: AppContainer = request.app.state.container
    entry = await container.quick_log_service.log_entry(
        entry_type=payload.type,
        day=payload.date,
        subtype=payload.subtype,
        notes=payload.notes,
        duration_minutes=payload.duration_minutes,
        payload=payload.photo_bytes(),
        captured_at=payload.captured_at,
    )
    return entry.to_dict()


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: str, request: Request) -> Response:
    """Delete an entry and its photo."""
    container: AppContainer = request.app.state.container
    await container.store.delete_entry(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/days/{day}")
async def day_view(day: str, request: Request) -> dict[str, object]:
    """Return a day's entries in time order, its summary and its analysis."""
    container: AppContainer = request.app.state.container
    entries = await container.store.get_entries_by_date(day)
    summary = await container.store.get_daily_summary(day)
    analysis = await container.goals_service.get_analysis(day)
    return {
        "date": day,
        "entries": [
            entry.to_dict() for entry in sorted(entries, key=lambda e: e.timestamp)
        ],
        "summary": summary.to_dict(),
        "analysis": analysis.to_dict() if analysis else None,
    }


@router.patch("/days/{day}/summary")
async def update_summary(
    day: str, payload: SummaryUpdate, request: Request
) -> dict[str, object]:
    """Merge fields into the day's summary."""
    container: AppContainer = request.app.state.container
    summary = await container.store.update_daily_summary(day, payload.changes())
    return summary.to_dict()


@router.post("/days/{day}/water")
async def add_water(day: str, payload: WaterAdd, request: Request) -> dict[str, object]:
    """Add to the day's water total."""
    container: AppContainer = request.app.state.container
    summary = await container.quick_log_service.add_water(day, payload.oz)
    return summary.to_dict()


@router.get("/days/{day}/export")
async def export_day(day: str, request: Request) -> Response:
    """Download the day as a ZIP archive."""
    container: AppContainer = request.app.state.container
    export = await container.export_service.export_day(day)
    return Response(
        content=export.content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("/entries")
async def list_entries(
    request: Request,
    entry_type: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> dict[str, object]:
    """List entries by type and/or day range."""
    container: AppContainer = request.app.state.container
    if entry_type:
        entries = await container.store.get_entries_by_type(entry_type, start, end)
    elif start and end:
        entries = await container.store.get_entries_by_date_range(start, end)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide entry_type or both start and end",
        )
    return {
        "entries": [
            entry.to_dict() for entry in sorted(entries, key=lambda e: e.timestamp)
        ]
    }
