"""Which executives of a period make it into the roster."""

from enum import Enum


class ExecutiveFetchPolicy(str, Enum):
    # Every executive row of the period.
    SIMPLE = "simple"
    # Only executives whose name was ever linked to a profile, in any period.
    LINKED = "linked"
