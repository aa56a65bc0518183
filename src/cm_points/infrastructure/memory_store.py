"""In-memory balance table and ledger.

Neither class locks: callers hold the per-account lock from
PointsService so that a balance adjust and its ledger append are one step.
"""

import itertools
from collections import defaultdict

from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.errors import InsufficientBalanceError
from src.cm_points.domain.models import Transaction


class InMemoryBalanceStore:
    def __init__(self) -> None:
        self._balances: dict[str, int] = {}

    def read(self, user_id: str) -> int:
        return self._balances.get(user_id, 0)

    def adjust(self, user_id: str, delta: int) -> int:
        """Apply a signed delta. Never stores a negative balance."""
        current = self.read(user_id)
        new_balance = current + delta
        if delta < 0 and new_balance < 0:
            raise InsufficientBalanceError(required=-delta, available=current)
        self._balances[user_id] = new_balance
        return new_balance


class InMemoryLedger:
    """Append-only. Entries are kept per account in insertion (= id) order."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._ids = itertools.count(1)
        self._entries: dict[str, list[Transaction]] = defaultdict(list)

    def append(
        self,
        user_id: str,
        amount: int,
        balance_after: int,
        tx_type: str,
        description: str,
    ) -> Transaction:
        tx = Transaction(
            id=next(self._ids),
            user_id=user_id,
            amount=amount,
            balance_after=balance_after,
            tx_type=tx_type,
            description=description,
            created_at=self._clock(),
        )
        self._entries[user_id].append(tx)
        return tx

    def list_for(
        self,
        user_id: str,
        before_id: int | None = None,
        limit: int | None = None,
    ) -> list[Transaction]:
        """Newest first. `before_id` is an exclusive cursor."""
        newest_first = reversed(self._entries.get(user_id, []))
        if before_id is not None:
            newest_first = (tx for tx in newest_first if tx.id < before_id)
        return list(itertools.islice(newest_first, limit))
