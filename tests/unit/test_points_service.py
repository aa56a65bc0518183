"""Unit tests for PointsService: conservation, non-negativity, concurrency."""

import asyncio

import pytest

from src.cm_common.errors import (
    InsufficientBalanceError,
    InsufficientPointsError,
    InvalidAmountError,
)
from src.cm_common.locks import KeyedLocks
from src.cm_points.application.service import PointsService
from src.cm_points.domain.invariants import verify_balance_invariant
from src.cm_points.infrastructure.memory_store import InMemoryBalanceStore, InMemoryLedger


@pytest.fixture
def balances() -> InMemoryBalanceStore:
    return InMemoryBalanceStore()


@pytest.fixture
def ledger(clock) -> InMemoryLedger:
    return InMemoryLedger(clock)


@pytest.fixture
def points(balances, ledger) -> PointsService:
    return PointsService(balances, ledger)


class TestAdjust:
    async def test_credit_records_transaction(self, points, balances, ledger) -> None:
        tx = await points.adjust("u1", 1000, "Admin top-up")
        assert tx.amount == 1000
        assert tx.balance_after == 1000
        assert tx.tx_type == "credit"
        assert points.get_balance("u1") == 1000
        verify_balance_invariant("u1", balances, ledger)

    async def test_debit_records_negative_amount(self, points) -> None:
        await points.adjust("u1", 1000, "top-up")
        tx = await points.adjust("u1", -300, "correction")
        assert tx.amount == -300
        assert tx.tx_type == "debit"
        assert tx.balance_after == 700

    async def test_removal_beyond_balance_rejected(self, points, ledger) -> None:
        await points.adjust("u1", 100, "top-up")
        with pytest.raises(InsufficientBalanceError):
            await points.adjust("u1", -101, "too much")
        assert points.get_balance("u1") == 100
        assert len(ledger.list_for("u1")) == 1

    async def test_zero_delta_rejected(self, points) -> None:
        with pytest.raises(InvalidAmountError):
            await points.adjust("u1", 0, "noop")


class TestSpend:
    async def test_spend_debits(self, points) -> None:
        await points.adjust("u1", 1000, "top-up")
        tx = await points.spend("u1", 500, "promotion")
        assert tx.amount == -500
        assert points.get_balance("u1") == 500

    async def test_spend_more_than_balance(self, points, ledger) -> None:
        await points.adjust("u1", 1000, "top-up")
        with pytest.raises(InsufficientPointsError) as exc_info:
            await points.spend("u1", 1200, "promotion")
        assert exc_info.value.required == 1200
        assert exc_info.value.available == 1000
        assert points.get_balance("u1") == 1000
        assert len(ledger.list_for("u1")) == 1

    async def test_spend_entire_balance(self, points) -> None:
        await points.adjust("u1", 300, "top-up")
        await points.spend("u1", 300, "promotion")
        assert points.get_balance("u1") == 0

    @pytest.mark.parametrize("cost", [0, -5])
    async def test_non_positive_cost_rejected(self, points, cost: int) -> None:
        with pytest.raises(InvalidAmountError):
            await points.spend("u1", cost, "promotion")


class TestConcurrency:
    async def test_concurrent_spends_never_overdraw(self, points, balances, ledger) -> None:
        await points.adjust("u1", 1000, "top-up")

        results = await asyncio.gather(
            *(points.spend("u1", 300, f"spend {i}") for i in range(5)),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, InsufficientPointsError)]
        assert len(succeeded) == 3
        assert len(failed) == 2
        assert points.get_balance("u1") == 100
        verify_balance_invariant("u1", balances, ledger)

    async def test_mixed_credits_and_debits_conserve(self, points, balances, ledger) -> None:
        await points.adjust("u1", 500, "seed")
        ops = []
        for i in range(10):
            ops.append(points.adjust("u1", 100, f"credit {i}"))
            ops.append(points.spend("u1", 50, f"debit {i}"))
        await asyncio.gather(*ops)

        assert points.get_balance("u1") == 500 + 10 * 100 - 10 * 50
        verify_balance_invariant("u1", balances, ledger)

    async def test_injected_locks_are_used(self, balances, ledger) -> None:
        locks = KeyedLocks()
        points = PointsService(balances, ledger, locks)
        await points.adjust("u1", 100, "top-up")

        held = locks.get("u1")
        await held.acquire()
        spend = asyncio.create_task(points.spend("u1", 60, "promotion"))
        for _ in range(3):
            await asyncio.sleep(0)
        assert not spend.done()
        assert points.get_balance("u1") == 100

        held.release()
        await spend
        assert points.get_balance("u1") == 40
        verify_balance_invariant("u1", balances, ledger)


class TestListTransactions:
    async def test_pages_newest_first(self, points) -> None:
        for i in range(5):
            await points.adjust("u1", 10, f"credit {i}")

        first = points.list_transactions("u1", limit=2)
        assert [t.description for t in first.items] == ["credit 4", "credit 3"]
        assert first.has_more is True
        assert first.next_cursor is not None

        second = points.list_transactions("u1", cursor=first.next_cursor, limit=2)
        assert [t.description for t in second.items] == ["credit 2", "credit 1"]

        third = points.list_transactions("u1", cursor=second.next_cursor, limit=2)
        assert [t.description for t in third.items] == ["credit 0"]
        assert third.has_more is False
        assert third.next_cursor is None

    def test_no_history_is_empty_list(self, points) -> None:
        page = points.list_transactions("nobody")
        assert page.items == []
        assert page.has_more is False

    async def test_item_shows_balance_after(self, points) -> None:
        await points.adjust("u1", 70, "credit")
        item = points.list_transactions("u1").items[0]
        assert item.points == 70
        assert item.type == "credit"


class TestInvariantCheck:
    async def test_detects_tampered_balance(self, points, balances, ledger) -> None:
        await points.adjust("u1", 100, "credit")
        balances.adjust("u1", 5)  # bypasses the ledger
        with pytest.raises(AssertionError, match="INV-1"):
            verify_balance_invariant("u1", balances, ledger)
