"""Pydantic schemas for cm_points API."""

from pydantic import BaseModel, Field

from src.cm_points.domain.models import Transaction

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AdminAdjustRequest(BaseModel):
    points: int = Field(..., description="Signed delta: positive adds, negative removes")
    description: str = Field("Admin adjustment", max_length=255)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    user_id: str
    points: int


class TransactionItem(BaseModel):
    id: int
    amount: int
    points: int  # balance after this transaction
    type: str
    description: str
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionItem":
        return cls(
            id=tx.id,
            amount=tx.amount,
            points=tx.balance_after,
            type=tx.tx_type,
            description=tx.description,
            created_at=tx.created_at.isoformat(),
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool


class AdminAdjustResponse(BaseModel):
    user_id: str
    points: int
    transaction: TransactionItem
