# Friend schemas
from .friendship import (
    FriendTargetRequest,
    SuccessResponse,
    FriendActionResponse,
    FriendStateResponse
)

__all__ = [
    "FriendTargetRequest",
    "SuccessResponse",
    "FriendActionResponse",
    "FriendStateResponse"
]
