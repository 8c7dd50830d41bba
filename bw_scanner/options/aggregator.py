"""Rank buckets and summary rows for option tables."""

from typing import List, Optional

from ..models import CallOption, OptionTable


def distribute_by_rank(buckets: List[List[CallOption]], rows: List[CallOption]) -> None:
    """
    Append a ticker's ranked rows to the matching buckets.

    ``rows[0]`` goes to the closest bucket, ``rows[1]`` to the second and
    so on. Rows beyond the number of buckets are dropped.
    """
    for bucket, row in zip(buckets, rows):
        bucket.append(row)


def average_return(rows: List[CallOption]) -> Optional[float]:
    """
    Mean of every cash yield and every assigned gain in the table.

    This is the mean of the pooled values, not the mean of the two means.
    Returns None for an empty table.
    """
    values = [row.cash_yield for row in rows] + [row.assigned_gain for row in rows]
    if not values:
        return None
    return sum(values) / len(values)


def summarize(rows: List[CallOption]) -> OptionTable:
    """Wrap a bucket in an OptionTable with its summary average."""
    return OptionTable(rows=list(rows), average_return=average_return(rows))
