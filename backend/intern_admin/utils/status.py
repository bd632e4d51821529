"""Status vocabulary shared by registrations and selection records."""

PENDING = "pending"
PASSED = "passed"
FAILED = "failed"

VALID_STATUSES = (PENDING, PASSED, FAILED)

# Filter sentinel meaning "do not filter on this dimension".
ALL = "all"


def normalize_status(value: str | None) -> str:
    return str(value or "").strip().lower()


def is_valid_status(value: str | None) -> bool:
    return normalize_status(value) in VALID_STATUSES


def is_filter_value(value: str | None) -> bool:
    """True when a query filter is set to something other than empty or ``all``."""
    text = str(value or "").strip()
    return bool(text) and text.lower() != ALL
