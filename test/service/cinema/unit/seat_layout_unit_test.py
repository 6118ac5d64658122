"""
Unit tests for SeatLayout

Covers label parsing, layout document validation and classification of
requested seats into categories.
"""

import pytest

from src.platform.exception.exceptions import (
    InvalidInputError,
    InvalidSeatFormatError,
    SeatOutOfLayoutError,
)
from src.service.cinema.domain.value_object.seat_layout import (
    SeatLabel,
    SeatLayout,
    parse_seat_label,
)
from test.cinema_constants import DEFAULT_LAYOUT


@pytest.fixture
def layout() -> SeatLayout:
    return SeatLayout.from_document(DEFAULT_LAYOUT)


@pytest.mark.unit
class TestParseSeatLabel:
    @pytest.mark.parametrize(
        'label,expected',
        [('A1', SeatLabel('A', 1)), ('B10', SeatLabel('B', 10)), ('AA123', SeatLabel('AA', 123))],
    )
    def test_valid_labels(self, label: str, expected: SeatLabel) -> None:
        assert parse_seat_label(label) == expected
        assert str(parse_seat_label(label)) == label

    @pytest.mark.parametrize('label', ['a1', '1A', 'A', 'ABC1', 'A1234', 'A-1', '', ' A1'])
    def test_malformed_labels_rejected(self, label: str) -> None:
        with pytest.raises(InvalidSeatFormatError) as exc_info:
            parse_seat_label(label)
        assert exc_info.value.status_code == 400


@pytest.mark.unit
class TestLayoutDocument:
    def test_capacity_and_categories(self, layout: SeatLayout) -> None:
        assert layout.category_names == ['regular', 'premium', 'recliner']
        assert layout.total_capacity() == 10 + 10 + 6

    def test_document_round_trip(self, layout: SeatLayout) -> None:
        assert layout.to_document() == DEFAULT_LAYOUT
        assert SeatLayout.from_document(layout.to_document()) == layout

    def test_row_in_two_categories_rejected(self) -> None:
        document = {
            'regular': {'rows': ['A', 'B'], 'seatsPerRow': 10},
            'premium': {'rows': ['B'], 'seatsPerRow': 8},
        }
        with pytest.raises(InvalidInputError, match='row B'):
            SeatLayout.from_document(document)

    @pytest.mark.parametrize(
        'entry',
        [
            {'rows': [], 'seatsPerRow': 10},
            {'rows': ['A'], 'seatsPerRow': 0},
            {'rows': ['A'], 'seatsPerRow': True},
            {'rows': ['A'], 'seatsPerRow': '10'},
            {'rows': ['a'], 'seatsPerRow': 10},
            {'seatsPerRow': 10},
        ],
    )
    def test_invalid_category_rejected(self, entry: dict) -> None:
        with pytest.raises(InvalidInputError):
            SeatLayout.from_document({'regular': entry})

    def test_empty_document_is_empty_layout(self) -> None:
        assert SeatLayout.from_document({}).is_empty


@pytest.mark.unit
class TestClassify:
    def test_partition_spans_every_category(self, layout: SeatLayout) -> None:
        labels = [label for category in layout.categories for label in category.labels()]

        classified = layout.classify(labels)

        assert set(classified) == set(layout.category_names)
        assert sorted(label for seats in classified.values() for label in seats) == sorted(labels)
        for category in layout.categories:
            assert classified[category.name] == category.labels()

    def test_only_populated_categories_returned(self, layout: SeatLayout) -> None:
        assert layout.classify(['B2', 'A1']) == {'premium': ['B2'], 'regular': ['A1']}

    def test_seat_beyond_row_length_rejected(self, layout: SeatLayout) -> None:
        with pytest.raises(SeatOutOfLayoutError) as exc_info:
            layout.classify(['A1', 'C7'])
        assert exc_info.value.label == 'C7'

    def test_unknown_row_rejected(self, layout: SeatLayout) -> None:
        with pytest.raises(SeatOutOfLayoutError):
            layout.classify(['Z1'])

    def test_malformed_label_rejects_whole_batch(self, layout: SeatLayout) -> None:
        with pytest.raises(InvalidSeatFormatError):
            layout.classify(['A1', 'a2'])

    def test_duplicates_rejected(self, layout: SeatLayout) -> None:
        with pytest.raises(InvalidInputError, match='A1'):
            layout.classify(['A1', 'A2', 'A1'])

    def test_empty_request_rejected(self, layout: SeatLayout) -> None:
        with pytest.raises(InvalidInputError):
            layout.classify([])
