from prometheus_client import Counter, Histogram


class TicketingMetrics:
    """
    Ticketing core metrics collector

    Tracks the two consistency-critical paths: turning paid orders into
    tickets (capacity + issuance) and admitting tickets at the gate (scans).
    """

    def __init__(self) -> None:
        # ========== Capacity Ledger ==========
        self.capacity_reservations = Counter(
            'capacity_reservations_total',
            'Tier capacity reservation attempts',
            ['result'],  # reserved/sold_out/tier_inactive/tier_not_found
        )

        # ========== Issuance ==========
        self.issuance_requests = Counter(
            'issuance_requests_total',
            'Ticket issuance requests per completed payment',
            ['result'],  # issued/already_issued/capacity_exceeded
        )

        self.tickets_issued = Counter('tickets_issued_total', 'Tickets created by issuance')

        self.issuance_duration = Histogram(
            'issuance_duration_seconds',
            'Issuance transaction duration',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
        )

        self.ticket_code_collisions = Counter(
            'ticket_code_collisions_total',
            'Issuance transactions retried after a ticket code collision',
        )

        # ========== Gate Scans ==========
        self.scan_outcomes = Counter(
            'scan_outcomes_total',
            'Gate scan classifications',
            ['result'],  # success/already_scanned/invalid/expired/wrong_event
        )

        self.scan_conflicts = Counter(
            'scan_conflicts_total',
            'Scans that lost the confirmed -> scanned race and were re-classified',
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str) -> None:
        self.capacity_reservations.labels(result=result).inc()

    def record_issuance(self, *, result: str, ticket_count: int = 0, duration: float) -> None:
        self.issuance_requests.labels(result=result).inc()
        if ticket_count:
            self.tickets_issued.inc(ticket_count)
        self.issuance_duration.observe(duration)

    def record_scan(self, *, result: str) -> None:
        self.scan_outcomes.labels(result=result).inc()


# Global metrics instance
metrics = TicketingMetrics()
