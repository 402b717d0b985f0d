import enum

# Enums

class IntervalCategory(str, enum.Enum):
    """Display tiers, ordered by priority (lower rank renders first/topmost)."""
    DIRECT = "direct"
    RELATIONSHIP_BLOCK = "relationship_block"
    PROPAGATED_BLOCK = "propagated_block"

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)


TIER_ORDER = [
    IntervalCategory.DIRECT,
    IntervalCategory.RELATIONSHIP_BLOCK,
    IntervalCategory.PROPAGATED_BLOCK,
]

class GridMode(str, enum.Enum):
    MONTH = "month"
    ROLLING = "rolling"

class PropertyType(str, enum.Enum):
    PARENT = "parent"
    CHILD = "child"
    STANDALONE = "standalone"

class Platform(str, enum.Enum):
    AIRBNB = "Airbnb"
    BOOKING = "Booking"
    VRBO = "VRBO"
    MANUAL = "Manual"
    OTHER = "Other"

class RoundingStyle(str, enum.Enum):
    FULL = "full"
    SOFT = "soft"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


BLOCKED_STATUS = "Blocked"
