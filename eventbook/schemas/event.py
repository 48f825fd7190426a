"""
Event-related Pydantic schemas

Request schemas only shape the payload; field constraints are enforced by
the validation pipeline so that every write path reports them the same way.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel

class EventCreate(BaseModel):
    """Schema for creating an event"""
    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[List[str]] = None
    organizer: Optional[str] = None
    tags: Optional[List[str]] = None

class EventUpdate(EventCreate):
    """Schema for a partial event update; unset fields are left alone"""

class EventResponse(BaseModel):
    """Event response"""
    id: str
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class EventDetail(EventResponse):
    """Event response with booking count"""
    booking_count: int
