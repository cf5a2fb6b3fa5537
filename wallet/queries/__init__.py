"""Query package."""

from wallet.queries.aggregator import PaymentAggregator, partition

__all__ = ["PaymentAggregator", "partition"]
