"""Schedule repository - Loads and stores a member's schedule document"""

import logging

from sqlalchemy.orm import Session

from ...models import Member
from ..members import MemberRepository
from .codec import decode_document, encode_document
from .document import ScheduleDocument

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """Repository for the schedule block list stored on a member record"""

    @staticmethod
    def load_document(member: Member) -> ScheduleDocument:
        """Decode the member's schedule property (an empty schedule if unset or corrupt)"""
        return decode_document(member.schedule)

    @staticmethod
    def save_document(db: Session, member: Member, document: ScheduleDocument) -> None:
        """Encode the schedule and write it back through the member record"""
        MemberRepository.save_schedule(db, member, encode_document(document))
        logger.debug(f"Saved schedule for member {member.id} ({len(document)} items)")
