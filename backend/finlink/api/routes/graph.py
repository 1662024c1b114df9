"""Graph route — relationship map visualization."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.core.database import get_db
from finlink.models.schemas import GraphResponse
from finlink.services.graph_service import load_graph

router = APIRouter()


@router.get(
    "/graph",
    response_model=GraphResponse,
    summary="Get account/phone nodes and their links",
)
async def get_graph(db: AsyncSession = Depends(get_db)):
    return await load_graph(db)
