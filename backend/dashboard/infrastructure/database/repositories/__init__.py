from .client_repository import SQLAlchemyClientRepository
from .executive_repository import SQLAlchemyExecutiveRepository
from .profile_repository import SQLAlchemyProfileRepository

__all__ = [
    "SQLAlchemyClientRepository",
    "SQLAlchemyExecutiveRepository",
    "SQLAlchemyProfileRepository",
]
