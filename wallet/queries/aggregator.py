"""
Payment Aggregation

DESIGN DECISION: The total is the same whatever the worker count.
Workers only read disjoint, contiguous slices of the payment list and
add their partial sums into one shared total under a lock. The lock
guards the merge, never a worker's own loop.

Every payment counts toward the total, failed ones included.
"""

import math
import threading
from typing import Sequence

from wallet.models.ledger import Payment


def partition(length: int, parallelism: int) -> list[range]:
    """
    Split [0, length) into contiguous chunks of ceil(length / parallelism).

    The last chunk is truncated, so fewer than `parallelism` chunks
    may come back (e.g. length=5, parallelism=4 gives sizes 2, 2, 1).
    """
    if length <= 0:
        return []
    if parallelism <= 1:
        return [range(0, length)]
    size = math.ceil(length / parallelism)
    return [range(start, min(start + size, length)) for start in range(0, length, size)]


class PaymentAggregator:
    """
    Computes total payment volume over a payment sequence.

    The sequence is read, never modified. Callers must not mutate the
    ledger while a sum is running.
    """

    def __init__(self, payments: Sequence[Payment]):
        self._payments = payments

    def _sum_range(self, indexes: range) -> int:
        payments = self._payments
        return sum(payments[i].amount for i in indexes)

    def sum_payments(self, parallelism: int = 1) -> int:
        """
        Sum the amount of every payment.

        Args:
            parallelism: Number of worker threads. Values <= 1 sum
                         sequentially on the calling thread.

        Returns:
            Total in minor units. 0 for an empty sequence.
        """
        if parallelism <= 1:
            return self._sum_range(range(len(self._payments)))

        total = 0
        lock = threading.Lock()

        def worker(indexes: range) -> None:
            nonlocal total
            partial = self._sum_range(indexes)
            with lock:
                total += partial

        threads = [
            threading.Thread(target=worker, args=(chunk,), name=f"sum-payments-{n}")
            for n, chunk in enumerate(partition(len(self._payments), parallelism))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return total
