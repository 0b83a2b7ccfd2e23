"""Events — park events and their park associations.

Invariants:
    - Every park id linked to an event refers to a live park (400 otherwise)
    - PUT replaces the park links only when park_ids is present in the body
    - end_date is never before start_date
    - Deleting an event removes its park links first
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.api.routes.parks import get_park_or_404
from parks_backoffice.core.domain_types import EventStatus
from parks_backoffice.core.errors import InvalidInputError
from parks_backoffice.infrastructure.database import atomic, get_db
from parks_backoffice.models.event import Event, EventPark
from parks_backoffice.models.park import Park
from parks_backoffice.schemas.asset import BulkDeleteResponse
from parks_backoffice.schemas.event import (
    EventBulkDelete, EventCreate, EventParkRef, EventResponse, EventUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["events"])


async def _parks_by_event(
    db: AsyncSession, event_ids: list[int],
) -> dict[int, list[EventParkRef]]:
    if not event_ids:
        return {}
    result = await db.execute(
        select(EventPark.event_id, Park.id, Park.name)
        .join(Park, Park.id == EventPark.park_id)
        .where(EventPark.event_id.in_(event_ids))
        .order_by(Park.name),
    )
    parks: dict[int, list[EventParkRef]] = {}
    for event_id, park_id, name in result.all():
        parks.setdefault(event_id, []).append(EventParkRef(id=park_id, name=name))
    return parks


async def _with_parks(db: AsyncSession, events: list[Event]) -> list[EventResponse]:
    parks = await _parks_by_event(db, [e.id for e in events])
    return [
        EventResponse.model_validate(e).model_copy(update={"parks": parks.get(e.id, [])})
        for e in events
    ]


async def _check_parks(db: AsyncSession, park_ids: list[int]) -> list[int]:
    unique_ids = list(dict.fromkeys(park_ids))
    if not unique_ids:
        return []
    result = await db.execute(
        select(Park.id).where(Park.id.in_(unique_ids), Park.is_deleted.is_(False)),
    )
    known = set(result.scalars().all())
    missing = [pid for pid in unique_ids if pid not in known]
    if missing:
        raise InvalidInputError(f"Unknown park id(s): {missing}", "park_ids")
    return unique_ids


async def _replace_park_links(
    db: AsyncSession, event_id: int, park_ids: list[int],
) -> None:
    await db.execute(delete(EventPark).where(EventPark.event_id == event_id))
    db.add_all(EventPark(event_id=event_id, park_id=pid) for pid in park_ids)
    await db.flush()


async def _delete_event(db: AsyncSession, event: Event) -> None:
    await db.execute(delete(EventPark).where(EventPark.event_id == event.id))
    await db.delete(event)
    await db.flush()


# ─── Events ──────────────────────────────────────────────────────

@router.get("/events", response_model=list[EventResponse])
async def list_events(
    event_type: str | None = None,
    status_filter: EventStatus | None = Query(None, alias="status"),
    target_audience: str | None = None,
    park_id: int | None = None,
    start_date_from: date | None = None,
    start_date_to: date | None = None,
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    query = select(Event)
    if event_type:
        query = query.where(Event.event_type == event_type)
    if status_filter is not None:
        query = query.where(Event.status == status_filter.value)
    if target_audience:
        query = query.where(Event.target_audience == target_audience)
    if park_id is not None:
        query = query.where(Event.id.in_(
            select(EventPark.event_id).where(EventPark.park_id == park_id),
        ))
    if start_date_from is not None:
        query = query.where(Event.start_date >= start_date_from)
    if start_date_to is not None:
        query = query.where(Event.start_date <= start_date_to)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Event.title.ilike(pattern),
            Event.description.ilike(pattern),
            Event.location.ilike(pattern),
        ))
    result = await db.execute(query.order_by(Event.start_date.desc(), Event.id))
    return await _with_parks(db, list(result.scalars()))


@router.post("/events/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_events(body: EventBulkDelete, db: AsyncSession = Depends(get_db)):
    deleted: list[int] = []
    not_found: list[int] = []
    async with atomic(db):
        for event_id in dict.fromkeys(body.ids):
            event = await db.get(Event, event_id)
            if event is None:
                not_found.append(event_id)
                continue
            await _delete_event(db, event)
            deleted.append(event_id)
    logger.info(f"Bulk-deleted {len(deleted)} event(s)")
    return BulkDeleteResponse(deleted=deleted, not_found=not_found)


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, db: AsyncSession = Depends(get_db)):
    event = await get_or_404(db, Event, event_id)
    return (await _with_parks(db, [event]))[0]


@router.post(
    "/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED,
)
async def create_event(body: EventCreate, db: AsyncSession = Depends(get_db)):
    park_ids = await _check_parks(db, body.park_ids)
    event = Event(**body.model_dump(exclude={"park_ids"}, exclude_none=True))
    async with atomic(db):
        db.add(event)
        await db.flush()
        await _replace_park_links(db, event.id, park_ids)
    await db.refresh(event)
    logger.info(f"Event {event.title} created", extra={"event_id": event.id})
    return (await _with_parks(db, [event]))[0]


@router.put("/events/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int, body: EventUpdate, db: AsyncSession = Depends(get_db),
):
    event = await get_or_404(db, Event, event_id)
    changes = body.model_dump(exclude_unset=True)
    park_ids = changes.pop("park_ids", None)
    if park_ids is not None:
        park_ids = await _check_parks(db, park_ids)

    start = changes.get("start_date") or event.start_date
    end = changes["end_date"] if "end_date" in changes else event.end_date
    if end is not None and end < start:
        raise InvalidInputError("end_date cannot be before start_date", "end_date")

    async with atomic(db):
        apply_update(event, changes)
        if park_ids is not None:
            await _replace_park_links(db, event.id, park_ids)
        await db.flush()
    await db.refresh(event)
    return (await _with_parks(db, [event]))[0]


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, db: AsyncSession = Depends(get_db)):
    event = await get_or_404(db, Event, event_id)
    async with atomic(db):
        await _delete_event(db, event)
    logger.info("Event deleted", extra={"event_id": event_id})


@router.get("/parks/{park_id}/events", response_model=list[EventResponse])
async def list_park_events(park_id: int, db: AsyncSession = Depends(get_db)):
    await get_park_or_404(db, park_id)
    result = await db.execute(
        select(Event)
        .join(EventPark, EventPark.event_id == Event.id)
        .where(EventPark.park_id == park_id)
        .order_by(Event.start_date.desc()),
    )
    return await _with_parks(db, list(result.scalars()))
