from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from src.platform.exception.exceptions import PricingMissingError
from src.service.cinema.app.interface.i_show_repo import IShowRepo
from src.service.cinema.domain.value_object.fee_breakdown import FeeBreakdown


DEFAULT_MULTIPLIER = Decimal('1')


def category_price(
    base_price: Decimal, category: str, multipliers: Mapping[str, Decimal]
) -> Decimal:
    """Price for one category, rounded half-up to a whole unit. Unlisted categories use x1."""
    raw = Decimal(base_price) * multipliers.get(category, DEFAULT_MULTIPLIER)
    return raw.quantize(Decimal('1'), rounding=ROUND_HALF_UP)


def price_sheet(
    base_price: Decimal, categories: Iterable[str], multipliers: Mapping[str, Decimal]
) -> dict[str, Decimal]:
    return {name: category_price(base_price, name, multipliers) for name in categories}


class PricingResolver:
    def __init__(
        self,
        *,
        show_repo: IShowRepo,
        convenience_fee_rate: Decimal,
        gst_rate: Decimal,
    ) -> None:
        self.show_repo = show_repo
        self.convenience_fee_rate = convenience_fee_rate
        self.gst_rate = gst_rate
        self._pricing: dict[int, dict[str, Decimal]] = {}

    async def _sheet(self, show_id: int) -> dict[str, Decimal]:
        if show_id not in self._pricing:
            self._pricing[show_id] = await self.show_repo.get_pricing(show_id=show_id)
        return self._pricing[show_id]

    async def price_for(self, *, show_id: int, category: str) -> Decimal:
        sheet = await self._sheet(show_id)
        if category not in sheet:
            raise PricingMissingError(category)
        return sheet[category]

    async def ticket_total(self, *, show_id: int, categories: Iterable[str]) -> Decimal:
        """Sum of one price per seat; `categories` has one entry per seat."""
        total = Decimal('0')
        for category in categories:
            total += await self.price_for(show_id=show_id, category=category)
        return total

    def derive_total(self, *, raw_ticket_total: Decimal, fnb_total: Decimal) -> FeeBreakdown:
        return FeeBreakdown.derive(
            ticket_total=raw_ticket_total,
            fnb_total=fnb_total,
            convenience_fee_rate=self.convenience_fee_rate,
            gst_rate=self.gst_rate,
        )
