"""Entry layout module.

This module turns raw entry strings into the lines shown by the selector.

Layouts:
- PlainLayout: entries are shown as given
- ColumnLayout: entries are split on a separator and aligned into
  fixed-width columns, truncating fields that do not fit

Example:
    >>> layout = ColumnLayout(width=94, columns=3, separator=";")
    >>> layout.set_breakdown([50, 20, 30])
    >>> line = layout.apply("Msg;User;Date")
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Appended to fields cut short to fit their column
TRUNCATION_SUFFIX = ".. "


class BreakdownError(ValueError):
    """Raised when a column breakdown does not match the layout."""

    pass


@runtime_checkable
class Layout(Protocol):
    """Protocol for entry layouts."""

    def apply(self, entry: str) -> str:
        """Return the display string for an entry."""
        ...


class PlainLayout:
    """Identity layout, entries are displayed unchanged."""

    def apply(self, entry: str) -> str:
        return entry


class ColumnLayout:
    """Align separator-delimited entries into fixed-width columns.

    Each field gets a share of the total width given by the breakdown
    percentages. Without a breakdown every field gets ``100 // columns``
    percent.
    """

    def __init__(self, width: int, columns: int, separator: str):
        """Initialize column layout.

        Args:
            width: Total line width in characters
            columns: Number of fields per entry
            separator: Delimiter between fields in an entry

        Raises:
            ValueError: If width or columns is not positive, or separator is empty
        """
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if columns <= 0:
            raise ValueError(f"columns must be positive, got {columns}")
        if not separator:
            raise ValueError("separator cannot be empty")

        self.width = width
        self.columns = columns
        self.separator = separator
        self.breakdown: list[int] = []

    def set_breakdown(self, values: list[int]) -> None:
        """Set per-column width percentages.

        Args:
            values: One percentage per column, summing to 100

        Raises:
            BreakdownError: If the count differs from columns or the sum is not 100
        """
        values = list(values)
        if len(values) != self.columns:
            raise BreakdownError(
                f"Breakdown has {len(values)} values but layout has {self.columns} columns"
            )
        if sum(values) != 100:
            raise BreakdownError(f"Breakdown must sum to 100, got {sum(values)}")

        self.breakdown = values
        logger.debug(f"Column breakdown set to {values}")

    def budgets(self, field_count: int) -> list[int]:
        """Return the width budget of each field.

        Without an explicit breakdown the even split is repeated once per
        field actually present, which may differ from ``columns``.
        """
        if self.breakdown:
            return [percent * self.width // 100 for percent in self.breakdown]

        even = 100 // self.columns
        return [even * self.width // 100] * field_count

    def apply(self, entry: str) -> str:
        fields = entry.split(self.separator)
        budgets = self.budgets(len(fields))

        parts = []
        for field, budget in zip(fields, budgets):
            if len(field) < budget:
                field = field.ljust(budget)
            elif len(field) > budget:
                field = field[: max(budget - 2, 0)] + TRUNCATION_SUFFIX
            parts.append(field)

        return "".join(parts)


__all__ = ["BreakdownError", "ColumnLayout", "Layout", "PlainLayout", "TRUNCATION_SUFFIX"]
