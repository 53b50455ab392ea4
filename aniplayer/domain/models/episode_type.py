"""
EpisodeType Domain Model

Classification tag for an episode, derived from the folder it lives in.
"""

from __future__ import annotations

from enum import Enum


class EpisodeType(str, Enum):
    """Kind of episode; stored by value in the catalog."""
    EPISODE = "EPISODE"
    SPECIAL = "SPECIAL"
    OVA = "OVA"
    OAD = "OAD"
    NCOP = "NCOP"
    NCED = "NCED"

    @classmethod
    def from_value(cls, value: str | None) -> "EpisodeType":
        """Map a stored value back to a type; unknown values become EPISODE."""
        if not value:
            return cls.EPISODE
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.EPISODE
