"""Schedule service - Business logic for a member's schedule"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import SCHEDULE_DEFAULT_TITLE, SCHEDULE_ITEM_ELEMENT_ALIAS
from ...models import Member
from ..content import ContentRepository, resolve_document_reference
from .document import START_TIME_ALIAS, TITLE_ALIAS, WORKOUT_ALIAS, ScheduleBlock
from .repository import ScheduleRepository
from .schemas import (
    MemberScheduleResponse,
    MemberSummary,
    ScheduleItemResponse,
    ScheduleRepairResult,
    ScheduleUpdateResult,
)
from .temporal import decode_datetime, encode_datetime, is_legacy_encoding, parse_range_date

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "umb://"


def normalize_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        return SCHEDULE_DEFAULT_TITLE
    return title


def project_item(block: ScheduleBlock) -> Optional[ScheduleItemResponse]:
    """Build the API view of an item, or None if its start time can't be read"""
    start = decode_datetime(block.value_of(START_TIME_ALIAS))
    if start is None:
        return None
    return ScheduleItemResponse(
        key=block.key,
        startTime=start,
        dateISO=start.strftime("%Y-%m-%d"),
        time=start.strftime("%H:%M"),
        title=normalize_title(block.value_of(TITLE_ALIAS)),
        workoutUdi=block.value_of(WORKOUT_ALIAS),
    )


class ScheduleService:
    """Service layer for schedule operations"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    @staticmethod
    def _require_member(member: Optional[Member]) -> Member:
        if member is None:
            raise HTTPException(status_code=401, detail="Not authenticated")
        return member

    def normalize_workout_reference(self, workout_id: Optional[str]) -> Optional[str]:
        """
        Resolve a workout identifier to the stored reference form.

        Accepts a reference (umb://...) as-is, a content key (UUID) or a
        numeric content node id. Returns None when nothing can be resolved.
        """
        if workout_id is None or not workout_id.strip():
            return None

        if workout_id.strip().lower().startswith(REFERENCE_PREFIX):
            return workout_id

        reference = resolve_document_reference(self.db, workout_id.strip())
        if reference is None:
            logger.warning(f"⚠️ Could not resolve workout identifier {workout_id!r}")
        return reference

    def list_items(
        self,
        member: Optional[Member],
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> list[ScheduleItemResponse]:
        """Get schedule items ordered by start time, optionally within an inclusive date range"""
        member = self._require_member(member)
        document = self.repo.load_document(member)

        from_date: Optional[date] = parse_range_date(date_from)
        to_date: Optional[date] = parse_range_date(date_to)

        result = []
        for block in document.items.values():
            item = project_item(block)
            if item is None:
                logger.debug(f"Skipping schedule item {block.key} with unreadable start time")
                continue
            item_date = item.startTime.date()
            if from_date and item_date < from_date:
                continue
            if to_date and item_date > to_date:
                continue
            result.append(item)

        result.sort(key=lambda i: i.startTime)
        return result

    def get_member_with_schedule(self, member: Optional[Member]) -> MemberScheduleResponse:
        """Get the member's profile summary together with the full schedule"""
        member = self._require_member(member)
        return MemberScheduleResponse(
            member=MemberSummary(id=member.id, key=member.key, name=member.name, email=member.email),
            schedule=self.list_items(member),
        )

    def create_item(
        self,
        member: Optional[Member],
        start_time: str,
        title: Optional[str] = None,
        workout_id: Optional[str] = None,
    ) -> ScheduleItemResponse:
        """Add an item to the member's schedule"""
        member = self._require_member(member)
        logger.info(f"📥 Creating schedule item for member {member.id}")

        start = decode_datetime(start_time)
        if start is None:
            raise HTTPException(status_code=422, detail="Invalid startTime")

        content_type_key = ContentRepository.get_content_type_key(self.db, SCHEDULE_ITEM_ELEMENT_ALIAS)
        if content_type_key is None:
            logger.error(f"❌ Content type '{SCHEDULE_ITEM_ELEMENT_ALIAS}' not found")
            raise HTTPException(status_code=500, detail="Schedule item content type is not configured")

        document = self.repo.load_document(member)

        block = ScheduleBlock(key="", content_type_key=content_type_key)
        document.add_item(block)
        document.upsert_field(block, START_TIME_ALIAS, encode_datetime(start))
        document.upsert_field(block, TITLE_ALIAS, normalize_title(title))
        document.upsert_field(block, WORKOUT_ALIAS, self.normalize_workout_reference(workout_id))

        self.repo.save_document(self.db, member, document)
        logger.info(f"✅ Schedule item {block.key} created for member {member.id}")
        return project_item(block)

    def update_item(
        self,
        member: Optional[Member],
        key: str,
        start_time: Optional[str] = None,
        title: Optional[str] = None,
        workout_id: Optional[str] = None,
    ) -> ScheduleUpdateResult:
        """Update the provided fields of an item, leaving the rest as stored"""
        member = self._require_member(member)
        document = self.repo.load_document(member)

        block = document.find(key)
        if block is None:
            raise HTTPException(status_code=404, detail="Schedule item not found")

        if start_time is not None:
            start = decode_datetime(start_time)
            if start is None:
                logger.warning(f"⚠️ Ignoring unreadable startTime {start_time!r} for item {key}")
            else:
                document.upsert_field(block, START_TIME_ALIAS, encode_datetime(start))

        if title is not None:
            document.upsert_field(block, TITLE_ALIAS, normalize_title(title))

        if workout_id is not None:
            if not workout_id.strip():
                document.upsert_field(block, WORKOUT_ALIAS, None)
            else:
                reference = self.normalize_workout_reference(workout_id)
                if reference is not None:
                    document.upsert_field(block, WORKOUT_ALIAS, reference)

        self.repo.save_document(self.db, member, document)
        return ScheduleUpdateResult(updated=True)

    def delete_item(self, member: Optional[Member], key: str) -> None:
        """Remove an item. Deleting an unknown key is a no-op."""
        member = self._require_member(member)
        document = self.repo.load_document(member)

        if not document.remove_item(key):
            logger.debug(f"Schedule item {key} not found for member {member.id}, nothing to delete")
            return

        self.repo.save_document(self.db, member, document)
        logger.info(f"🗑️ Schedule item {key} deleted for member {member.id}")

    def repair(self, member: Optional[Member]) -> ScheduleRepairResult:
        """Rewrite start times stored in a legacy encoding into the canonical form"""
        member = self._require_member(member)
        document = self.repo.load_document(member)

        changed = 0
        for block in document.items.values():
            raw = block.value_of(START_TIME_ALIAS)
            if raw is None or not raw.strip() or not is_legacy_encoding(raw):
                continue
            start = decode_datetime(raw)
            if start is None:
                logger.debug(f"Leaving unreadable start time on item {block.key}: {raw!r}")
                continue
            document.upsert_field(block, START_TIME_ALIAS, encode_datetime(start))
            changed += 1

        if changed > 0:
            self.repo.save_document(self.db, member, document)
            logger.info(f"🔧 Repaired {changed} start time(s) for member {member.id}")

        return ScheduleRepairResult(changed=changed)
