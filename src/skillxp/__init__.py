"""
skillxp - Experience rate engine

Normalizes user-editable experience config into per-category lookup tables,
serves XP values and multipliers, and tracks expiring XP gains.
"""

__version__ = "0.1.0"
__author__ = "skillxp contributors"

from skillxp.errors import SkillXPError, UnsupportedCategory
from skillxp.resolver import CanonicalId, IdentifierRegistry, IdentifierSpace
from skillxp.tables import Category, CategoryTable, LookupRegistry, Skill
from skillxp.multipliers import MultiplierStore, SpecialGroup
from skillxp.tracker import GainRecord, GainTracker
from skillxp.config import ExperienceConfig
from skillxp.engine import ExperienceEngine
