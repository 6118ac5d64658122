from decimal import ROUND_HALF_UP, Decimal

import attrs


CENT = Decimal('0.01')


def to_money(value: Decimal) -> Decimal:
    """Two-decimal rounding, applied only when a figure leaves the service."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@attrs.frozen
class FeeBreakdown:
    tickets: Decimal
    fnb: Decimal
    convenience_fee: Decimal
    gst: Decimal
    total: Decimal

    @classmethod
    def derive(
        cls,
        *,
        ticket_total: Decimal,
        fnb_total: Decimal,
        convenience_fee_rate: Decimal,
        gst_rate: Decimal,
    ) -> 'FeeBreakdown':
        subtotal = ticket_total + fnb_total
        convenience_fee = subtotal * convenience_fee_rate
        gst = (subtotal + convenience_fee) * gst_rate
        return cls(
            tickets=ticket_total,
            fnb=fnb_total,
            convenience_fee=convenience_fee,
            gst=gst,
            total=subtotal + convenience_fee + gst,
        )

    def to_document(self) -> dict[str, str]:
        """Snapshot stored on the payment row, rounded like the API response."""
        return {
            'tickets': str(to_money(self.tickets)),
            'fnb': str(to_money(self.fnb)),
            'convenienceFee': str(to_money(self.convenience_fee)),
            'gst': str(to_money(self.gst)),
            'total': str(to_money(self.total)),
        }
