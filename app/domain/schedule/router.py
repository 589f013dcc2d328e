"""Schedule router - FastAPI endpoints for a member's schedule"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from ...auth import get_current_member
from ...database import get_db
from ...models import Member
from .schemas import (
    MemberScheduleResponse,
    ScheduleItemCreate,
    ScheduleItemResponse,
    ScheduleItemUpdate,
    ScheduleRepairResult,
    ScheduleUpdateResult,
)
from .service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/schedule", tags=["Schedule"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


@router.get("", response_model=list[ScheduleItemResponse])
async def get_schedule(
    date_from: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, inclusive"),
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the current member's schedule ordered by start time"""
    return service.list_items(current_member, date_from, date_to)


@router.get("/member", response_model=MemberScheduleResponse)
async def get_member_with_schedule(
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Get the current member together with their schedule"""
    return service.get_member_with_schedule(current_member)


@router.post("", response_model=ScheduleItemResponse, status_code=201)
async def create_schedule_item(
    data: ScheduleItemCreate,
    response: Response,
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Add an item to the current member's schedule"""
    item = service.create_item(current_member, data.startTime, data.title, data.workoutId)
    response.headers["Location"] = f"{router.prefix}/{item.key}"
    return item


@router.post("/repair", response_model=ScheduleRepairResult)
async def repair_schedule(
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Rewrite legacy-encoded start times in the canonical format"""
    return service.repair(current_member)


@router.put("/{key}", response_model=ScheduleUpdateResult)
async def update_schedule_item(
    key: str,
    data: ScheduleItemUpdate,
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Update the provided fields of a schedule item"""
    return service.update_item(current_member, key, data.startTime, data.title, data.workoutId)


@router.delete("/{key}", status_code=204)
async def delete_schedule_item(
    key: str,
    current_member: Member = Depends(get_current_member),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Delete a schedule item (deleting an unknown item succeeds)"""
    service.delete_item(current_member, key)
    return Response(status_code=204)


__all__ = [
    "router",
    "get_schedule",
    "get_member_with_schedule",
    "create_schedule_item",
    "update_schedule_item",
    "delete_schedule_item",
    "repair_schedule",
]
