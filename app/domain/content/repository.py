"""Content repository - Lookups against platform content types and nodes"""

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from ...models import ContentNode, ContentType
from ...shared.validators import parse_int_id, parse_uuid

logger = logging.getLogger(__name__)

DOCUMENT_UDI_PREFIX = "umb://document/"


class ContentRepository:
    """Repository for content identity lookups"""

    @staticmethod
    def get_key(db: Session, node_id: int) -> Optional[str]:
        """Get the key of a content node by its numeric id"""
        node = db.query(ContentNode).filter(ContentNode.id == node_id).first()
        return node.key if node else None

    @staticmethod
    def get_content_type_key(db: Session, alias: str) -> Optional[str]:
        """Get the key of a content type by alias"""
        content_type = db.query(ContentType).filter(ContentType.alias == alias).first()
        return content_type.key if content_type else None


def document_udi(key: uuid.UUID) -> str:
    """Format a content key as a document UDI (umb://document/<32 hex digits>)"""
    return f"{DOCUMENT_UDI_PREFIX}{key.hex}"


def resolve_document_reference(db: Session, identifier: str) -> Optional[str]:
    """
    Resolve a structured or numeric content identifier to a document UDI.

    Args:
        db: Database session
        identifier: A content key (UUID) or a numeric node id

    Returns:
        The canonical document UDI, or None if the identifier is unresolvable
    """
    key = parse_uuid(identifier)
    if key is not None:
        return document_udi(key)

    node_id = parse_int_id(identifier)
    if node_id is None:
        return None

    node_key = ContentRepository.get_key(db, node_id)
    if node_key is None:
        logger.debug(f"Content node {node_id} not found")
        return None

    parsed = parse_uuid(node_key)
    if parsed is None:
        logger.warning(f"⚠️ Content node {node_id} has a malformed key: {node_key!r}")
        return None
    return document_udi(parsed)
