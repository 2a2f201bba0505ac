"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model speaking the camelCase wire format of the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class BudgetLevel(str, Enum):
    """Trip budget tier."""

    budget = "Budget"
    mid_range = "Mid-range"
    luxury = "Luxury"

    @property
    def code(self) -> str:
        """Single-letter code used in share links."""
        return _BUDGET_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "BudgetLevel | None":
        """Resolve a single-letter share code, or None if unknown."""
        for level, level_code in _BUDGET_CODES.items():
            if level_code == code:
                return level
        return None


_BUDGET_CODES = {
    BudgetLevel.budget: "B",
    BudgetLevel.mid_range: "M",
    BudgetLevel.luxury: "L",
}
