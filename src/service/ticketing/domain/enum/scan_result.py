from enum import StrEnum


class ScanResult(StrEnum):
    """Classification of one code presented at a gate."""

    SUCCESS = 'success'
    ALREADY_SCANNED = 'already_scanned'
    INVALID = 'invalid'
    EXPIRED = 'expired'
    WRONG_EVENT = 'wrong_event'
