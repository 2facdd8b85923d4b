import uuid_utils


def new_id() -> str:
    """Time-ordered UUIDv7 rendered as a 36-char string."""
    return str(uuid_utils.uuid7())
