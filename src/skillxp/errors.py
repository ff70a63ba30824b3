"""
Exceptions raised by skillxp.

Missing data is never an exception here: lookups return None. Only contract
violations by calling code are raised.
"""


class SkillXPError(Exception):
    """Base class for skillxp errors."""


class UnsupportedCategory(SkillXPError):
    """Raised when a category-specific accessor is used for a skill or category
    that structurally cannot carry that kind of data."""
    def __init__(self, target, operation: str = "lookup"):
        self.target = target
        self.operation = operation
        name = getattr(target, "name", target)
        super().__init__(f"{operation} is not supported for {name}")
