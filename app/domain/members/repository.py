"""Member repository - Database operations for platform members"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Member

logger = logging.getLogger(__name__)


class MemberRepository:
    """Repository for member database operations"""

    @staticmethod
    def get_member_by_id(db: Session, member_id: int) -> Optional[Member]:
        """Get member by ID"""
        return db.query(Member).filter(Member.id == member_id).first()

    @staticmethod
    def get_member_by_key(db: Session, key: str) -> Optional[Member]:
        """Get member by key (case-insensitive UUID match)"""
        return db.query(Member).filter(Member.key == key.lower()).first()

    @staticmethod
    def get_member_by_username(db: Session, username: str) -> Optional[Member]:
        """Get member by username"""
        return db.query(Member).filter(Member.username == username).first()

    @staticmethod
    def get_member_by_email(db: Session, email: str) -> Optional[Member]:
        """Get member by email"""
        return db.query(Member).filter(Member.email == email).first()

    @staticmethod
    def get_member_by_firebase_uid(db: Session, firebase_uid: str) -> Optional[Member]:
        """Get member by Firebase UID"""
        return db.query(Member).filter(Member.firebase_uid == firebase_uid).first()

    @staticmethod
    def save_schedule(db: Session, member: Member, schedule_json: str) -> Member:
        """Write the raw schedule property back to the member record"""
        member.schedule = schedule_json
        try:
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Failed to save schedule for member {member.id}: {e}")
            raise
        db.refresh(member)
        return member
