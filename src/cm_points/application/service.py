"""PointsService — the only writer of balances and ledger entries.

Every mutation runs read-check-adjust-append under the account's lock, so a
balance change and its ledger entry are created together or not at all.
"""

import logging
from collections.abc import Callable

from src.cm_common.enums import TransactionType
from src.cm_common.errors import (
    AppError,
    InsufficientBalanceError,
    InsufficientPointsError,
    InvalidAmountError,
)
from src.cm_common.locks import KeyedLocks
from src.cm_common.pagination import cursor_decode, cursor_encode
from src.cm_points.application.schemas import (
    BalanceResponse,
    TransactionItem,
    TransactionListResponse,
)
from src.cm_points.domain.models import Transaction
from src.cm_points.domain.repository import BalanceStoreProtocol, LedgerProtocol

logger = logging.getLogger(__name__)


class PointsService:
    def __init__(
        self,
        balances: BalanceStoreProtocol,
        ledger: LedgerProtocol,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._balances = balances
        self._ledger = ledger
        self._locks = locks if locks is not None else KeyedLocks()

    def get_balance(self, user_id: str) -> int:
        return self._balances.read(user_id)

    async def adjust(self, user_id: str, delta: int, description: str) -> Transaction:
        """Signed adjustment (admin top-up or removal).

        Raises InsufficientBalanceError when a removal exceeds the balance.
        """
        return await self._apply(user_id, delta, description, InsufficientBalanceError)

    async def spend(self, user_id: str, cost: int, description: str) -> Transaction:
        """Debit `cost` points for a purchase.

        Raises InsufficientPointsError (user-facing "buy more points") when the
        balance is below the cost.
        """
        if cost <= 0:
            raise InvalidAmountError(cost)
        return await self._apply(user_id, -cost, description, InsufficientPointsError)

    async def _apply(
        self,
        user_id: str,
        delta: int,
        description: str,
        insufficient: Callable[[int, int], AppError],
    ) -> Transaction:
        if delta == 0:
            raise InvalidAmountError(delta)

        async with self._locks.get(user_id):
            available = self._balances.read(user_id)
            if delta < 0 and available + delta < 0:
                raise insufficient(-delta, available)

            balance_after = self._balances.adjust(user_id, delta)
            tx_type = TransactionType.CREDIT if delta > 0 else TransactionType.DEBIT
            tx = self._ledger.append(
                user_id, delta, balance_after, tx_type.value, description
            )

        logger.info(
            "Points %s: user=%s amount=%d balance_after=%d tx=%d",
            tx.tx_type, user_id, delta, balance_after, tx.id,
        )
        return tx

    def balance_response(self, user_id: str) -> BalanceResponse:
        return BalanceResponse(user_id=user_id, points=self.get_balance(user_id))

    def list_transactions(
        self, user_id: str, cursor: str | None = None, limit: int = 20
    ) -> TransactionListResponse:
        before_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without counting
        entries = self._ledger.list_for(user_id, before_id=before_id, limit=limit + 1)
        has_more = len(entries) > limit
        page = entries[:limit]

        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(tx) for tx in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
