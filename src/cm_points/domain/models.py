"""Domain models for cm_points — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Transaction:
    id: int
    user_id: str
    amount: int          # points, positive=credit negative=debit
    balance_after: int   # balance snapshot after this entry
    tx_type: str         # TransactionType value
    description: str
    created_at: datetime
