"""Row listing routes for the data explorer."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.core.database import get_db
from finlink.models.db_models import Account, Transaction, CallRecord
from finlink.models.schemas import AccountResponse, TransactionResponse, CallResponse
from finlink.services import data_service

router = APIRouter()


@router.get("/accounts", response_model=list[AccountResponse], summary="List accounts")
async def list_accounts(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await data_service.list_rows(db, Account, limit=limit)


@router.get("/transactions", response_model=list[TransactionResponse], summary="List transactions")
async def list_transactions(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await data_service.list_rows(db, Transaction, limit=limit)


@router.get("/calls", response_model=list[CallResponse], summary="List call records")
async def list_calls(
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await data_service.list_rows(db, CallRecord, limit=limit)
