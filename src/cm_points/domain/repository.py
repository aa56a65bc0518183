"""Store Protocols — dependency inversion for testability.

The in-memory implementations live in infrastructure/; anything moving the
balance table or ledger to a shared transactional store only has to satisfy
these two contracts.
"""

from typing import Protocol

from src.cm_points.domain.models import Transaction


class BalanceStoreProtocol(Protocol):
    def read(self, user_id: str) -> int: ...

    def adjust(self, user_id: str, delta: int) -> int: ...


class LedgerProtocol(Protocol):
    def append(
        self,
        user_id: str,
        amount: int,
        balance_after: int,
        tx_type: str,
        description: str,
    ) -> Transaction: ...

    def list_for(
        self,
        user_id: str,
        before_id: int | None = None,
        limit: int | None = None,
    ) -> list[Transaction]: ...
