"""Round-robin distribution of grid items into masonry buckets."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

from galleria.widgets.errors import InvalidArgument

T = TypeVar('T')


class MasonryOrientation(str, Enum):
    """How the renderer lays out buckets; distribution ignores it."""
    COLUMNS = 'columns'
    ROWS = 'rows'


def _check_bucket_count(bucket_count) -> int:
    # bool is an int subclass but never a meaningful count.
    if isinstance(bucket_count, bool) or not isinstance(bucket_count, int):
        raise InvalidArgument(
            f'bucket_count must be an int, got {type(bucket_count).__name__}')
    if bucket_count <= 0:
        raise InvalidArgument(
            f'bucket_count must be positive, got {bucket_count}')
    return bucket_count


def bucket_index(position: int, bucket_count: int) -> int:
    """Return the bucket an item at `position` is assigned to."""
    bucket_count = _check_bucket_count(bucket_count)
    if position < 0:
        raise InvalidArgument(f'position must be >= 0, got {position}')
    return position % bucket_count


def distribute(items: Sequence[T], bucket_count: int) -> list[list[T]]:
    """
    Stripe `items` across `bucket_count` buckets.

    Bucket j receives the items at positions j, j + K, j + 2K, ... so
    consecutive items land in neighbouring columns (or rows). This is a fixed
    position-modulo scheme; item sizes are not taken into account.

    Args:
        items: Items in display order.
        bucket_count: Number of buckets K, must be a positive int.

    Returns:
        Exactly K lists. Bucket sizes differ by at most one.

    Raises:
        InvalidArgument: If bucket_count is not a positive int.
    """
    bucket_count = _check_bucket_count(bucket_count)
    items = list(items)
    return [items[j::bucket_count] for j in range(bucket_count)]


def distribute_clamped(items: Sequence[T], bucket_count) -> list[list[T]]:
    """Like `distribute`, but a bad bucket count falls back to one bucket."""
    try:
        bucket_count = _check_bucket_count(bucket_count)
    except InvalidArgument as e:
        print(f"[MASONRY] {e}; using a single bucket")
        bucket_count = 1
    return distribute(items, bucket_count)
