"""Stats route — dashboard summary cards."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.core.database import get_db
from finlink.models.schemas import StatsResponse
from finlink.services import data_service

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, summary="Row counts for accounts, transactions and calls")
async def get_stats(db: AsyncSession = Depends(get_db)):
    return await data_service.get_stats(db)
