from collections.abc import Iterable
from itertools import islice

from booking.entities import Pagination


def paginate[T](items: Iterable[T], pagination: Pagination | None = None) -> list[T]:
    """Apply an offset/limit window to ``items``.

    A missing offset starts at the beginning and a missing limit means no
    upper bound. An offset past the end gives an empty list.
    """
    if pagination is None:
        return list(items)

    start = pagination.offset or 0
    stop = None if pagination.limit is None else start + pagination.limit
    return list(islice(items, start, stop))
