from .client_repository import ClientRepository
from .executive_repository import ExecutiveRepository
from .profile_repository import ProfileRepository
from .change_feed import ChangeFeed, ChangeSubscription

__all__ = [
    "ClientRepository",
    "ExecutiveRepository",
    "ProfileRepository",
    "ChangeFeed",
    "ChangeSubscription",
]
