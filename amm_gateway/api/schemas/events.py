from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class EventResponse(BaseModel):
    id: int
    name: str
    payload: dict
    created_at: datetime


class EventListResponse(BaseModel):
    events: list[EventResponse]
