"""Members domain - Platform member records"""

from .repository import MemberRepository

__all__ = ["MemberRepository"]
