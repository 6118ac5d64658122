"""Unit tests for category pricing and the fee breakdown."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import PricingMissingError
from src.service.cinema.app.service.pricing_resolver import (
    PricingResolver,
    category_price,
    price_sheet,
)
from src.service.cinema.domain.value_object.fee_breakdown import FeeBreakdown, to_money


MULTIPLIERS = {'regular': Decimal('1'), 'premium': Decimal('1.2'), 'recliner': Decimal('1.5')}


@pytest.mark.unit
class TestCategoryPrice:
    def test_multiplier_applied(self) -> None:
        assert category_price(Decimal('100'), 'premium', MULTIPLIERS) == Decimal('120')
        assert category_price(Decimal('100'), 'recliner', MULTIPLIERS) == Decimal('150')

    def test_rounds_half_up_to_whole_units(self) -> None:
        # 245 * 1.2 = 294.0, 212.5 * 1 = 212.5 -> 213
        assert category_price(Decimal('245'), 'premium', MULTIPLIERS) == Decimal('294')
        assert category_price(Decimal('212.5'), 'regular', MULTIPLIERS) == Decimal('213')

    def test_unknown_category_defaults_to_base(self) -> None:
        assert category_price(Decimal('180'), 'balcony', MULTIPLIERS) == Decimal('180')

    def test_price_sheet_covers_every_category(self) -> None:
        assert price_sheet(Decimal('100'), ['regular', 'premium'], MULTIPLIERS) == {
            'regular': Decimal('100'),
            'premium': Decimal('120'),
        }


@pytest.mark.unit
class TestFeeBreakdown:
    def test_lifecycle_example(self) -> None:
        """One regular (100) + one premium (120) seat."""
        breakdown = FeeBreakdown.derive(
            ticket_total=Decimal('220'),
            fnb_total=Decimal('0'),
            convenience_fee_rate=Decimal('0.05'),
            gst_rate=Decimal('0.18'),
        )

        assert breakdown.convenience_fee == Decimal('11')
        assert to_money(breakdown.gst) == Decimal('41.58')
        assert to_money(breakdown.total) == Decimal('272.58')
        assert breakdown.to_document() == {
            'tickets': '220.00',
            'fnb': '0.00',
            'convenienceFee': '11.00',
            'gst': '41.58',
            'total': '272.58',
        }

    def test_fnb_is_part_of_the_fee_base(self) -> None:
        breakdown = FeeBreakdown.derive(
            ticket_total=Decimal('200'),
            fnb_total=Decimal('100'),
            convenience_fee_rate=Decimal('0.05'),
            gst_rate=Decimal('0.18'),
        )
        # (300 + 15) * 1.18 = 371.70
        assert breakdown.convenience_fee == Decimal('15')
        assert to_money(breakdown.total) == Decimal('371.70')

    def test_intermediate_values_are_not_rounded(self) -> None:
        breakdown = FeeBreakdown.derive(
            ticket_total=Decimal('0.1'),
            fnb_total=Decimal('0'),
            convenience_fee_rate=Decimal('0.05'),
            gst_rate=Decimal('0.18'),
        )
        assert breakdown.convenience_fee == Decimal('0.005')
        assert to_money(breakdown.convenience_fee) == Decimal('0.01')


@pytest.mark.unit
class TestPricingResolver:
    @pytest.fixture
    def show_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.get_pricing.return_value = {'regular': Decimal('100'), 'premium': Decimal('120')}
        return repo

    @pytest.fixture
    def resolver(self, show_repo: AsyncMock) -> PricingResolver:
        return PricingResolver(
            show_repo=show_repo,
            convenience_fee_rate=Decimal('0.05'),
            gst_rate=Decimal('0.18'),
        )

    async def test_ticket_total_counts_one_price_per_seat(
        self, resolver: PricingResolver, show_repo: AsyncMock
    ) -> None:
        total = await resolver.ticket_total(
            show_id=7, categories=['regular', 'regular', 'premium']
        )

        assert total == Decimal('320')
        show_repo.get_pricing.assert_awaited_once_with(show_id=7)

    async def test_missing_category_raises(self, resolver: PricingResolver) -> None:
        with pytest.raises(PricingMissingError) as exc_info:
            await resolver.price_for(show_id=7, category='recliner')
        assert exc_info.value.status_code == 500
        assert 'recliner' in exc_info.value.message
