"""Balance invariant verification."""

import logging

from src.cm_points.domain.repository import BalanceStoreProtocol, LedgerProtocol

logger = logging.getLogger(__name__)


def verify_balance_invariant(
    user_id: str, balances: BalanceStoreProtocol, ledger: LedgerProtocol
) -> None:
    """Raise AssertionError if the balance disagrees with the ledger.

    INV-1: balance == sum of the account's ledger amounts
    INV-2: balance >= 0
    INV-3: newest ledger entry's balance_after == balance
    """
    balance = balances.read(user_id)
    entries = ledger.list_for(user_id)
    total = sum(e.amount for e in entries)

    assert balance == total, (
        f"INV-1 violated: user={user_id} balance={balance} != ledger_sum={total}"
    )
    assert balance >= 0, f"INV-2 violated: user={user_id} balance={balance} < 0"
    if entries:
        newest = entries[0]
        assert newest.balance_after == balance, (
            f"INV-3 violated: user={user_id} last balance_after={newest.balance_after}"
            f" != balance={balance}"
        )

    logger.debug("Balance invariants OK: user=%s, balance=%d", user_id, balance)
