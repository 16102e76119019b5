"""
Services layer for the friend graph and remote configuration.

This layer handles:
- Friend graph persistence (friends.json)
- Friend request orchestration and notifications
- Remote configuration lookups (serverdata.json)
"""

from .friend_store import FriendStore
from .friendship_service import FriendshipService
from .server_data_service import ServerDataService

__all__ = [
    "FriendStore",
    "FriendshipService",
    "ServerDataService"
]
