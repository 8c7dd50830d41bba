"""
Call option package.

- scorer: near-the-money call selection and buy-write metrics
- aggregator: rank buckets and summary rows
"""

from .aggregator import average_return, distribute_by_rank, summarize
from .scorer import OptionScorer, partition_calls, score_call, select_expiration

__all__ = [
    "OptionScorer",
    "partition_calls",
    "score_call",
    "select_expiration",
    "average_return",
    "distribute_by_rank",
    "summarize",
]
