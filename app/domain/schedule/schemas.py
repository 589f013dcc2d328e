"""Schedule domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ScheduleItemCreate(BaseModel):
    """Schema for creating a schedule item"""

    startTime: str
    title: Optional[str] = None
    workoutId: Optional[str] = None


class ScheduleItemUpdate(BaseModel):
    """Schema for a partial update - omitted fields are left as stored"""

    startTime: Optional[str] = None
    title: Optional[str] = None
    workoutId: Optional[str] = None


class ScheduleItemResponse(BaseModel):
    """Schema for a schedule item response"""

    key: str
    startTime: datetime
    dateISO: str
    time: str
    title: str
    workoutUdi: Optional[str] = None


class MemberSummary(BaseModel):
    id: int
    key: str
    name: Optional[str] = None
    email: Optional[str] = None


class MemberScheduleResponse(BaseModel):
    member: MemberSummary
    schedule: list[ScheduleItemResponse]


class ScheduleUpdateResult(BaseModel):
    updated: bool


class ScheduleRepairResult(BaseModel):
    changed: int
