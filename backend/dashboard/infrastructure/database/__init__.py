from .base import Base
from .session import engine, async_session_factory, build_engine, build_session_factory
from .models import ClientModel, ExecutiveModel, ProfileModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "build_engine",
    "build_session_factory",
    "ClientModel",
    "ExecutiveModel",
    "ProfileModel",
]
