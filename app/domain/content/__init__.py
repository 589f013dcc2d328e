"""Content domain - Identity of platform content nodes"""

from .repository import ContentRepository, document_udi, resolve_document_reference

__all__ = ["ContentRepository", "document_udi", "resolve_document_reference"]
