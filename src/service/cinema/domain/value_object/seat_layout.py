"""
Screen seat layout.

A layout document maps each category to the rows it owns and the number of
seats in each of those rows:

    {"regular": {"rows": ["A", "B"], "seatsPerRow": 10},
     "premium": {"rows": ["C"], "seatsPerRow": 8}}

Seat labels are `<row><number>` (e.g. `B7`). Rows never appear in more than
one category, so a valid label resolves to exactly one category.
"""

import re
from typing import Any

import attrs

from src.platform.exception.exceptions import (
    InvalidInputError,
    InvalidSeatFormatError,
    SeatOutOfLayoutError,
)


SEAT_LABEL_PATTERN = re.compile(r'^([A-Z]{1,2})(\d{1,3})$')
ROW_LABEL_PATTERN = re.compile(r'^[A-Z]{1,2}$')


@attrs.frozen
class SeatLabel:
    row: str
    number: int

    def __str__(self) -> str:
        return f'{self.row}{self.number}'


def parse_seat_label(label: str) -> SeatLabel:
    if not isinstance(label, str) or not (match := SEAT_LABEL_PATTERN.match(label)):
        raise InvalidSeatFormatError(str(label))
    return SeatLabel(row=match.group(1), number=int(match.group(2)))


@attrs.frozen
class SeatCategory:
    name: str
    rows: tuple[str, ...]
    seats_per_row: int

    @property
    def capacity(self) -> int:
        return len(self.rows) * self.seats_per_row

    def contains(self, seat: SeatLabel) -> bool:
        return seat.row in self.rows and 1 <= seat.number <= self.seats_per_row

    def labels(self) -> list[str]:
        return [f'{row}{n}' for row in self.rows for n in range(1, self.seats_per_row + 1)]


@attrs.frozen
class SeatLayout:
    categories: tuple[SeatCategory, ...] = ()

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> 'SeatLayout':
        if not isinstance(document, dict):
            raise InvalidInputError('Invalid seat layout: expected an object of categories')

        categories: list[SeatCategory] = []
        owner_of_row: dict[str, str] = {}
        for name, entry in document.items():
            if not isinstance(entry, dict):
                raise InvalidInputError(f'Invalid seat layout: category {name} must be an object')
            rows = entry.get('rows')
            seats_per_row = entry.get('seatsPerRow')
            if not isinstance(rows, list) or not rows:
                raise InvalidInputError(f'Invalid seat layout: category {name} has no rows')
            if (
                isinstance(seats_per_row, bool)
                or not isinstance(seats_per_row, int)
                or seats_per_row < 1
            ):
                raise InvalidInputError(
                    f'Invalid seat layout: category {name} needs a positive seatsPerRow'
                )
            for row in rows:
                if not isinstance(row, str) or not ROW_LABEL_PATTERN.match(row):
                    raise InvalidInputError(f'Invalid seat layout: bad row label {row!r}')
                if row in owner_of_row:
                    raise InvalidInputError(
                        f'Invalid seat layout: row {row} is listed under both '
                        f'{owner_of_row[row]} and {name}'
                    )
                owner_of_row[row] = name
            categories.append(
                SeatCategory(name=name, rows=tuple(rows), seats_per_row=seats_per_row)
            )
        return cls(categories=tuple(categories))

    def to_document(self) -> dict[str, Any]:
        return {
            category.name: {'rows': list(category.rows), 'seatsPerRow': category.seats_per_row}
            for category in self.categories
        }

    @property
    def category_names(self) -> list[str]:
        return [category.name for category in self.categories]

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def total_capacity(self) -> int:
        return sum(category.capacity for category in self.categories)

    def category_of(self, label: str) -> str:
        seat = parse_seat_label(label)
        for category in self.categories:
            if category.contains(seat):
                return category.name
        raise SeatOutOfLayoutError(label)

    def classify(self, labels: list[str]) -> dict[str, list[str]]:
        """
        Partition requested labels by category.

        The whole batch is rejected on the first malformed or unknown label;
        only categories that received at least one seat appear in the result.
        """
        if not labels:
            raise InvalidInputError('At least one seat must be selected')
        if len(set(labels)) != len(labels):
            duplicates = sorted({label for label in labels if labels.count(label) > 1})
            raise InvalidInputError(f'Duplicate seats in request: {", ".join(duplicates)}')

        classified: dict[str, list[str]] = {}
        for label in labels:
            classified.setdefault(self.category_of(label), []).append(label)
        return classified
