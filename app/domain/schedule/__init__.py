"""Schedule domain - A member's planned sessions, stored as a block list on the member record"""

from .router import router

__all__ = ["router"]
