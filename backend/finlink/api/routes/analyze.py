"""Analyze route — AI risk assessment of the current network."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.core.database import get_db
from finlink.models.schemas import RiskAssessment
from finlink.services.graph_service import load_graph
from finlink.services.risk_engine import RiskAssessmentClient

router = APIRouter()


def get_assessment_client(request: Request) -> RiskAssessmentClient:
    return request.app.state.assessment_client


@router.get("/analyze", response_model=RiskAssessment, summary="Run the AI risk assessment")
async def analyze(
    db: AsyncSession = Depends(get_db),
    client: RiskAssessmentClient = Depends(get_assessment_client),
):
    """
    Send a slice of the relationship graph to the language model.

    Always answers 200: when the model is unreachable or misconfigured the
    body is the fallback assessment with a zero score.
    """
    graph = await load_graph(db)
    return await client.assess(graph.nodes, graph.links)
