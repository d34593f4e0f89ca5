from __future__ import annotations

from enum import Enum


class MealType(str, Enum):
    """Meal slots recorded during the day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"


class ConsumedAmount(str, Enum):
    """How much of a meal was eaten.

    The store keeps the raw text; values outside the known set map to OTHER
    and keep their raw text as display label.
    """

    NONE = "none"
    SOME = "some"
    HALF = "half"
    MOST = "most"
    FULL = "full"
    OTHER = "other"

    @classmethod
    def from_text(cls, value: str | None) -> "ConsumedAmount":
        normalized = (value or "").strip().lower()
        try:
            amount = cls(normalized)
        except ValueError:
            return cls.OTHER
        return amount


_CONSUMED_LABELS = {
    ConsumedAmount.NONE: "None",
    ConsumedAmount.SOME: "Some",
    ConsumedAmount.HALF: "Half",
    ConsumedAmount.MOST: "Most",
    ConsumedAmount.FULL: "Full",
}


def consumed_amount_label(value: str | None) -> str:
    """Display label for a stored consumed_amount text."""
    amount = ConsumedAmount.from_text(value)
    if amount is ConsumedAmount.OTHER:
        raw = (value or "").strip()
        return raw or "Unknown"
    return _CONSUMED_LABELS[amount]
