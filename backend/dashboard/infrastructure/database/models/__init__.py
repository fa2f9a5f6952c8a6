from .client import ClientModel
from .executive import ExecutiveModel
from .profile import ProfileModel

__all__ = [
    "ClientModel",
    "ExecutiveModel",
    "ProfileModel",
]
