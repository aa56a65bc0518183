"""Global enums shared across bounded contexts."""

from enum import Enum


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class PromotionPosition(str, Enum):
    """Promotion tier. Declaration order is ranking priority (first = highest)."""
    RANK1 = "rank1"   # single top slot
    TOP10 = "top10"   # elevated block


class VerificationNamespace(str, Enum):
    MOBILE_VERIFY = "mobile-verify"
    PASSWORD_RESET = "password-reset"
