from .profile import Profile
from .content import ContentKind, ContentItem, CommentItem
from .leaderboard import LeaderboardRow
from .rewards import (
    CountedPoints,
    EarnedPoints,
    ScoreBreakdown,
    ComputedFrom,
    RewardsResponse,
)

__all__ = [
    "Profile",
    "ContentKind",
    "ContentItem",
    "CommentItem",
    "LeaderboardRow",
    "CountedPoints",
    "EarnedPoints",
    "ScoreBreakdown",
    "ComputedFrom",
    "RewardsResponse",
]
