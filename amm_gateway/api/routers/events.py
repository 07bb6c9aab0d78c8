from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from amm_gateway.api.deps import get_list_events_use_case
from amm_gateway.api.schemas.events import EventListResponse, EventResponse
from amm_gateway.application.use_cases.list_events import ListEventsUseCase
from amm_gateway.domain.entities.events import event_payload


router = APIRouter()


@router.get("/v1/events", response_model=EventListResponse)
def list_events(
    limit: int = Query(50),
    use_case: ListEventsUseCase = Depends(get_list_events_use_case),
):
    try:
        records = use_case.execute(limit=limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return EventListResponse(
        events=[
            EventResponse(
                id=record.id,
                name=record.name,
                payload=event_payload(record.event),
                created_at=record.created_at,
            )
            for record in records
        ]
    )
