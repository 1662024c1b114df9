"""
Risk Assessment Client — delegates network review to Gemini.
Builds the prompt, calls the generateContent REST endpoint and parses the
constrained JSON answer. Any failure yields the fixed fallback assessment.
"""
import json
import time
from typing import Optional, Sequence
import httpx
import structlog

from finlink.core.config import settings
from finlink.models.schemas import GraphNode, GraphLink, RiskAssessment

log = structlog.get_logger()

FALLBACK_FINDING = "Analysis failed"

# Gemini structured-output schema for the three required fields
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "riskScore": {"type": "NUMBER"},
        "findings": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suspiciousEntities": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["riskScore", "findings", "suspiciousEntities"],
}

PROMPT_TEMPLATE = """
Analyze the following financial network data for suspicious patterns like fraud networks, mule accounts, or coordinated activities.

Nodes: {nodes}
Links: {links}

Identify:
1. Shared phone numbers across multiple accounts.
2. High-frequency interactions before transactions.
3. Potential clusters of suspicious entities.

Return a risk assessment in JSON format with:
- riskScore (0-100)
- findings (array of strings)
- suspiciousEntities (array of IDs)
"""


class AssessmentError(RuntimeError):
    pass


def fallback_assessment() -> RiskAssessment:
    return RiskAssessment(riskScore=0, findings=[FALLBACK_FINDING], suspiciousEntities=[])


def build_prompt(
    nodes: Sequence[GraphNode],
    links: Sequence[GraphLink],
    max_nodes: int = 50,
    max_links: int = 100,
) -> str:
    """Serialize the first max_nodes nodes and max_links links into the prompt."""
    node_json = json.dumps([n.model_dump(exclude_none=True) for n in nodes[:max_nodes]])
    link_json = json.dumps([link.model_dump(exclude_none=True) for link in links[:max_links]])
    return PROMPT_TEMPLATE.format(nodes=node_json, links=link_json)


def parse_response(payload: dict) -> RiskAssessment:
    """Pull the candidate text out of a generateContent reply and validate it."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise AssessmentError(f"Unexpected Gemini payload: {e}") from e
    return RiskAssessment.model_validate(json.loads(text or "{}"))


class RiskAssessmentClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.api_base = (api_base or settings.GEMINI_API_BASE).rstrip("/")
        self.timeout = settings.GEMINI_TIMEOUT_SECONDS if timeout is None else timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _generate(self, prompt: str) -> dict:
        if not self.api_key:
            raise AssessmentError("GEMINI_API_KEY is not set")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(
                f"{self.api_base}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=body,
            )
            resp.raise_for_status()
            return resp.json()

    async def assess(self, nodes: Sequence[GraphNode], links: Sequence[GraphLink]) -> RiskAssessment:
        """Return the model's assessment, or the fallback on any failure. Never raises."""
        start = time.perf_counter()
        prompt = build_prompt(
            nodes, links,
            max_nodes=settings.ANALYSIS_MAX_NODES,
            max_links=settings.ANALYSIS_MAX_LINKS,
        )
        try:
            result = parse_response(await self._generate(prompt))
        except Exception as e:
            log.error("AI analysis failed", model=self.model, error=str(e))
            return fallback_assessment()

        log.info(
            "AI analysis complete",
            model=self.model,
            risk_score=result.riskScore,
            findings=len(result.findings),
            latency_ms=f"{(time.perf_counter() - start) * 1000:.1f}",
        )
        return result
