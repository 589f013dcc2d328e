import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base


def generate_key():
    """Generate a unique key for platform entities"""
    return str(uuid.uuid4())


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(36), unique=True, index=True, nullable=False, default=generate_key)
    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), index=True, nullable=True)
    name = Column(String(255), nullable=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=True)
    # Raw block list JSON for the member's "schedule" property
    schedule = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class ContentType(Base):
    __tablename__ = "content_types"

    id = Column(Integer, primary_key=True, index=True)
    alias = Column(String(255), unique=True, index=True, nullable=False)
    key = Column(String(36), unique=True, nullable=False, default=generate_key)
    name = Column(String(255), nullable=True)


class ContentNode(Base):
    __tablename__ = "content_nodes"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(36), unique=True, index=True, nullable=False, default=generate_key)
    name = Column(String(255), nullable=True)
    content_type_alias = Column(String(255), nullable=True)  # e.g., workout
    created_at = Column(DateTime(timezone=True), server_default=func.now())
