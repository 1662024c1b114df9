"""Seed route — loads the demonstration dataset."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.core.database import get_db
from finlink.models.schemas import SeedResponse
from finlink.services import data_service

router = APIRouter()


@router.post("/seed", response_model=SeedResponse, summary="Insert the demo accounts, transactions and call")
async def seed(db: AsyncSession = Depends(get_db)):
    await data_service.seed_demo_data(db)
    return SeedResponse(status="success")
