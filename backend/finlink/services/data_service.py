"""
Data Service — row counts, row listings and the demo seed.
"""
import structlog
from sqlalchemy import select, func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.models.db_models import Account, Transaction, CallRecord
from finlink.models.schemas import StatsResponse

log = structlog.get_logger()

# ─── Demo Dataset ────────────────────────────────────────────────────────────
# Two accounts share one phone; both pay the third ("mule") account.
SEED_ACCOUNTS = [
    {"account_number": "ACC001", "customer_name": "John Doe", "registered_phone": "9876543210", "kyc_status": "Verified"},
    {"account_number": "ACC002", "customer_name": "Jane Smith", "registered_phone": "9876543210", "kyc_status": "Verified"},
    {"account_number": "ACC003", "customer_name": "Mule Account", "registered_phone": "1112223333", "kyc_status": "Pending"},
]

SEED_TRANSACTIONS = [
    {"transaction_id": "TXN001", "date": "2024-02-20", "amount": 5000, "sender_account": "ACC001", "receiver_account": "ACC003", "linked_phone": "9876543210"},
    {"transaction_id": "TXN002", "date": "2024-02-20", "amount": 4500, "sender_account": "ACC002", "receiver_account": "ACC003", "linked_phone": "9876543210"},
]

SEED_CALLS = [
    {"caller_number": "9876543210", "receiver_number": "1112223333", "duration": 120, "timestamp": "2024-02-20 10:00:00"},
]


async def _count(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def get_stats(session: AsyncSession) -> StatsResponse:
    return StatsResponse(
        accountCount=await _count(session, Account),
        transactionCount=await _count(session, Transaction),
        callCount=await _count(session, CallRecord),
    )


async def list_rows(session: AsyncSession, model, limit: int = 100) -> list:
    """Return up to `limit` rows of one table in insertion order."""
    result = await session.execute(select(model).order_by(model.id).limit(limit))
    return list(result.scalars().all())


async def seed_demo_data(session: AsyncSession):
    """
    Insert the fixed demo dataset in a single transaction.
    Accounts and transactions are skipped when their key already exists;
    the call row is appended on every run.
    """
    async with session.begin():
        for row in SEED_ACCOUNTS:
            await session.execute(
                insert(Account).values(**row).on_conflict_do_nothing(index_elements=["account_number"])
            )
        for row in SEED_TRANSACTIONS:
            await session.execute(
                insert(Transaction).values(**row).on_conflict_do_nothing(index_elements=["transaction_id"])
            )
        for row in SEED_CALLS:
            await session.execute(insert(CallRecord).values(**row))

    log.info(
        "Demo data seeded",
        accounts=len(SEED_ACCOUNTS),
        transactions=len(SEED_TRANSACTIONS),
        calls=len(SEED_CALLS),
    )
