"""
Domain Models Module

Contains all domain models for the catalog.
"""

from .episode_type import EpisodeType
from .catalog import Library, Series, Episode

__all__ = [
    "EpisodeType",
    "Library",
    "Series",
    "Episode",
]
