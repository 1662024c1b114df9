"""Tests for the Gemini risk assessment client (HTTP mocked with httpx.MockTransport)."""
import asyncio
import json

import httpx
import pytest

from finlink.models.schemas import GraphNode, GraphLink
from finlink.services.risk_engine import (
    AssessmentError,
    FALLBACK_FINDING,
    RiskAssessmentClient,
    build_prompt,
    parse_response,
)

from conftest import gemini_reply

NODES = [
    GraphNode(id="ACC001", type="account", label="John Doe"),
    GraphNode(id="9876543210", type="phone", label="9876543210"),
]
LINKS = [
    GraphLink(source="ACC001", target="9876543210", type="registered"),
]
ASSESSMENT = {
    "riskScore": 82,
    "findings": ["Phone 9876543210 is shared by two accounts"],
    "suspiciousEntities": ["ACC001", "9876543210"],
}


def _assess(handler, **kwargs):
    client = RiskAssessmentClient(api_key="test-key", transport=httpx.MockTransport(handler), **kwargs)
    return asyncio.run(client.assess(NODES, LINKS))


class TestBuildPrompt:
    def test_includes_serialized_graph(self):
        prompt = build_prompt(NODES, LINKS)
        assert '"id": "ACC001"' in prompt
        assert '"type": "registered"' in prompt
        assert "riskScore (0-100)" in prompt

    def test_registered_links_have_no_value_key(self):
        prompt = build_prompt(NODES, LINKS)
        assert '"value"' not in prompt

    def test_truncates_to_prefix(self):
        nodes = [GraphNode(id=f"ACC{i:03d}", type="account", label=str(i)) for i in range(60)]
        links = [GraphLink(source="ACC000", target=f"ACC{i:03d}", type="transaction", value=i) for i in range(120)]
        prompt = build_prompt(nodes, links, max_nodes=50, max_links=100)
        assert "ACC049" in prompt
        assert '"id": "ACC050"' not in prompt
        assert '"value": 99' in prompt
        assert '"value": 100' not in prompt


class TestParseResponse:
    def test_valid_reply(self):
        result = parse_response(gemini_reply(ASSESSMENT))
        assert result.riskScore == 82
        assert result.suspiciousEntities == ["ACC001", "9876543210"]

    def test_missing_candidates(self):
        with pytest.raises(AssessmentError):
            parse_response({"promptFeedback": {"blockReason": "SAFETY"}})

    def test_empty_text_fails_validation(self):
        with pytest.raises(ValueError):
            parse_response(gemini_reply(""))


class TestAssess:
    def test_success(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_reply(ASSESSMENT))

        result = _assess(handler, model="gemini-test")
        assert result.riskScore == 82
        assert result.findings == ASSESSMENT["findings"]
        assert seen["url"].endswith("/models/gemini-test:generateContent")
        assert seen["key"] == "test-key"
        config = seen["body"]["generationConfig"]
        assert config["responseMimeType"] == "application/json"
        assert config["responseSchema"]["required"] == ["riskScore", "findings", "suspiciousEntities"]

    def test_missing_key_returns_fallback_without_calling_out(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=gemini_reply(ASSESSMENT))

        client = RiskAssessmentClient(api_key="", transport=httpx.MockTransport(handler))
        result = asyncio.run(client.assess(NODES, LINKS))
        assert not client.configured
        assert calls == []
        assert result.riskScore == 0
        assert result.findings == [FALLBACK_FINDING]
        assert result.suspiciousEntities == []

    def test_remote_error_returns_fallback(self):
        result = _assess(lambda request: httpx.Response(503, json={"error": {"message": "overloaded"}}))
        assert result.riskScore == 0
        assert result.findings == [FALLBACK_FINDING]

    def test_network_error_returns_fallback(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _assess(handler)
        assert result.riskScore == 0

    def test_timeout_returns_fallback(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        result = _assess(handler, timeout=0.01)
        assert result.riskScore == 0
        assert result.findings == [FALLBACK_FINDING]
        assert result.suspiciousEntities == []

    def test_non_json_text_returns_fallback(self):
        result = _assess(lambda request: httpx.Response(200, json=gemini_reply("not json at all")))
        assert result.findings == [FALLBACK_FINDING]

    def test_out_of_range_score_returns_fallback(self):
        bad = dict(ASSESSMENT, riskScore=250)
        result = _assess(lambda request: httpx.Response(200, json=gemini_reply(bad)))
        assert result.riskScore == 0
