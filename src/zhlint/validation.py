"""Validations reported by rule handlers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

__all__ = ["ValidationTarget", "Validation"]


class ValidationTarget(Enum):
    """Which edit point of a token a validation concerns."""

    VALUE = "value"
    START_VALUE = "startValue"
    END_VALUE = "endValue"
    SPACE_AFTER = "spaceAfter"


@dataclass(frozen=True, slots=True)
class Validation:
    """One rule violation with its intended replacement.

    Offsets are block-relative inside the engine and document-absolute once
    the reassembler has shifted them.

    Attributes:
        rule: Name of the rule that reported it
        offset: Start of the token or delimiter concerned
        length: Length of the token or delimiter concerned
        target: Edit point
        message: Human-readable description
        intended_value: Replacement text for the edit point
    """

    rule: str
    offset: int
    length: int
    target: ValidationTarget
    message: str
    intended_value: str

    @property
    def edit_offset(self) -> int:
        """Position where the edit applies."""
        if self.target is ValidationTarget.SPACE_AFTER:
            return self.offset + self.length
        return self.offset

    def shifted(self, delta: int) -> Validation:
        return replace(self, offset=self.offset + delta)
