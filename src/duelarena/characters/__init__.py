"""
Character model for Duel Arena.

Contains:
- The closed job set with base stats, modifier formulas and level growth.
- The Character entity with job change and level-up progression.
"""

from .character import Character, is_valid_name
from .jobs import (
    BaseStats,
    Job,
    JobProfile,
    Modifiers,
    available_jobs,
    compute_modifiers,
    job_details,
)

__all__ = [
    "Character",
    "is_valid_name",
    "BaseStats",
    "Job",
    "JobProfile",
    "Modifiers",
    "available_jobs",
    "compute_modifiers",
    "job_details",
]
