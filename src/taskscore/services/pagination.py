"""Page size bounds shared by list operations."""

MAX_PAGE_SIZE = 100


def clamp_limit(limit: int) -> int:
    """Bound a requested page size to [1, MAX_PAGE_SIZE]."""
    return max(1, min(limit, MAX_PAGE_SIZE))
