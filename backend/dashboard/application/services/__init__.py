from .roster_mirror import RosterMirror
from .client_roster_manager import ClientRosterManager
from .executive_roster_manager import ExecutiveFetchPolicy, ExecutiveRosterManager

__all__ = [
    "RosterMirror",
    "ClientRosterManager",
    "ExecutiveFetchPolicy",
    "ExecutiveRosterManager",
]
