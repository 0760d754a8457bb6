from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware UTC now; every stored timestamp goes through this."""
    return datetime.now(timezone.utc)
