"""Pydantic schemas for API responses.

Field names are camelCase where the dashboard reads them that way.
"""
from typing import Literal, Optional, Union
from pydantic import BaseModel, Field, model_serializer


# ─── Stats ───────────────────────────────────────────────────────────────────
class StatsResponse(BaseModel):
    accountCount: int
    transactionCount: int
    callCount: int


# ─── Graph Schemas ───────────────────────────────────────────────────────────
class GraphNode(BaseModel):
    id: str
    type: Literal["account", "phone"]
    label: Optional[str] = None


class GraphLink(BaseModel):
    source: str
    target: str
    type: Literal["registered", "transaction", "call"]
    value: Optional[Union[int, float]] = None  # amount for transactions, seconds for calls

    @model_serializer(mode="wrap")
    def _drop_missing_value(self, handler):
        # registered links carry no value key at all
        data = handler(self)
        if data.get("value") is None:
            data.pop("value", None)
        return data


class GraphResponse(BaseModel):
    nodes: list[GraphNode] = []
    links: list[GraphLink] = []


# ─── Risk Assessment ─────────────────────────────────────────────────────────
class RiskAssessment(BaseModel):
    riskScore: float = Field(..., ge=0, le=100)
    findings: list[str]
    suspiciousEntities: list[str]


# ─── Seed ────────────────────────────────────────────────────────────────────
class SeedResponse(BaseModel):
    status: str


# ─── Row Schemas (data explorer) ─────────────────────────────────────────────
class AccountResponse(BaseModel):
    account_number: str
    customer_name: Optional[str]
    registered_phone: Optional[str]
    pan: Optional[str] = None
    address: Optional[str] = None
    kyc_status: Optional[str] = None

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    transaction_id: str
    date: Optional[str]
    amount: float
    sender_account: str
    receiver_account: str
    linked_phone: Optional[str] = None

    class Config:
        from_attributes = True


class CallResponse(BaseModel):
    caller_number: str
    receiver_number: str
    duration: int
    timestamp: Optional[str] = None

    class Config:
        from_attributes = True
