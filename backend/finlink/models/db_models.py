"""SQLAlchemy ORM models for the dashboard's three tables.

Account numbers, phones and transaction ids are plain text columns. Nothing
references another table through a foreign key: transactions and calls point
at accounts and phones informally.
"""
from typing import Optional

from sqlalchemy import String, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from finlink.core.database import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    registered_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # KYC fields, stored but not read by the graph
    pan: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    kyc_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    transaction_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sender_account: Mapped[str] = mapped_column(String(64), nullable=False)
    receiver_account: Mapped[str] = mapped_column(String(64), nullable=False)
    linked_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)


class CallRecord(Base):
    __tablename__ = "calls"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    caller_number: Mapped[str] = mapped_column(String(32), nullable=False)
    receiver_number: Mapped[str] = mapped_column(String(32), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # seconds
    timestamp: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
