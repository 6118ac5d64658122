from prometheus_client import Counter, Histogram


class CinemaMetrics:
    """Booking and seat-inventory metrics, scraped from /metrics."""

    def __init__(self):
        # ========== Booking Lifecycle ==========
        self.bookings_created = Counter(
            'cinema_bookings_created_total',
            'Bookings created with seats held',
            ['show_id'],
        )

        self.seat_conflicts = Counter(
            'cinema_seat_conflicts_total',
            'Booking attempts rejected because a seat was taken',
            ['show_id', 'stage'],  # stage: detect/insert
        )

        self.payments_resolved = Counter(
            'cinema_payments_resolved_total',
            'Payments resolved by the gateway simulation',
            ['outcome'],  # outcome: paid/failed/holds_expired
        )

        self.bookings_cancelled = Counter(
            'cinema_bookings_cancelled_total',
            'Paid bookings cancelled and refunded',
        )

        self.seats_per_booking = Histogram(
            'cinema_seats_per_booking',
            'Seats held per created booking',
            buckets=[1, 2, 3, 4, 6, 8, 10, 15, 20],
        )

    # ========== Helper Methods ==========

    def record_booking_created(self, *, show_id: int, seat_count: int):
        self.bookings_created.labels(show_id=show_id).inc()
        self.seats_per_booking.observe(seat_count)

    def record_seat_conflict(self, *, show_id: int, stage: str):
        self.seat_conflicts.labels(show_id=show_id, stage=stage).inc()

    def record_payment_resolved(self, *, outcome: str):
        self.payments_resolved.labels(outcome=outcome).inc()

    def record_booking_cancelled(self):
        self.bookings_cancelled.inc()


# Global metrics instance
metrics = CinemaMetrics()
