from enum import StrEnum


class ReservationResult(StrEnum):
    """Outcome of asking the capacity ledger for units of one tier."""

    RESERVED = 'reserved'
    SOLD_OUT = 'sold_out'
    TIER_INACTIVE = 'tier_inactive'
    TIER_NOT_FOUND = 'tier_not_found'

    @property
    def is_reserved(self) -> bool:
        return self is ReservationResult.RESERVED
