"""Error types raised by the food access tract network."""

from typing import Optional


class FoodAccessError(ValueError):
    """Base class for food access analysis errors."""


class MalformedRecordError(FoodAccessError):
    """A row is missing its tract id or has an unparsable score field."""

    def __init__(self, field: str, message: str, row_index: Optional[int] = None):
        self.field = field
        self.row_index = row_index
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        if self.row_index is None:
            return f"{self.field}: {self.message}"
        return f"row {self.row_index}: {self.field}: {self.message}"

    def with_row_index(self, row_index: int) -> "MalformedRecordError":
        return MalformedRecordError(self.field, self.message, row_index=row_index)


class EmptyGraphError(FoodAccessError):
    """Ranking was attempted on an empty node mapping."""


class InsufficientDataError(FoodAccessError):
    """Degree centrality is undefined for fewer than two ingested records."""


class DataLoadError(FoodAccessError):
    """The input table is empty, not decodable or not parsable."""
