"""Pagination Contract - bounded page windows and the uniform result envelope.

Invariants:
    - 1 <= limit <= max_limit, offset >= 0, else ValidationError (no store access)
    - Envelope is always {limit, offset, total, results}
    - len(results) <= limit; offset >= total yields results == [] (still a success)
"""

from dataclasses import dataclass
from typing import Any, Sequence

from brc20_api.core.errors import ValidationError

DEFAULT_API_LIMIT = 20
MAX_API_LIMIT = 60


@dataclass(frozen=True)
class PageWindow:
    """Request-scoped page window. Never persisted."""
    limit: int
    offset: int


def normalize_page(
    limit: int | None,
    offset: int | None,
    default_limit: int = DEFAULT_API_LIMIT,
    max_limit: int = MAX_API_LIMIT,
) -> PageWindow:
    """Apply defaults and bounds to raw limit/offset query values."""
    limit = default_limit if limit is None else limit
    offset = 0 if offset is None else offset
    if limit < 1 or limit > max_limit:
        raise ValidationError(
            f"limit must be between 1 and {max_limit}, got {limit}", "limit",
        )
    if offset < 0:
        raise ValidationError(
            f"offset must be >= 0, got {offset}", "offset",
        )
    return PageWindow(limit=limit, offset=offset)


def build_envelope(
    page: PageWindow, total: int, results: Sequence[Any],
) -> dict:
    """Shape a page of results into the paginated response envelope."""
    # Guard against stores that ignore LIMIT
    items = list(results)[:page.limit]
    if page.offset >= total:
        items = []
    return {
        "limit": page.limit,
        "offset": page.offset,
        "total": total,
        "results": items,
    }
