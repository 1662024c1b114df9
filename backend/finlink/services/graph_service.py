"""
Graph Aggregation Service — relationship map for the dashboard.
Joins accounts, transactions and calls into a node/link list.
"""
from typing import Iterable
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from finlink.models.db_models import Account, Transaction, CallRecord
from finlink.models.schemas import GraphNode, GraphLink, GraphResponse

log = structlog.get_logger()


def build_graph(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    calls: Iterable[CallRecord],
) -> GraphResponse:
    """
    Build the node/link view from table rows, keeping table order.

    Accounts and their registered phones become nodes. Transactions and calls
    become links only when both ends are already nodes; anything else is dropped.
    An account number and a phone with the same literal value share one node.
    """
    nodes: list[GraphNode] = []
    links: list[GraphLink] = []
    seen: set[str] = set()

    for acc in accounts:
        if acc.account_number not in seen:
            nodes.append(GraphNode(id=acc.account_number, type="account", label=acc.customer_name))
            seen.add(acc.account_number)
        phone = acc.registered_phone
        if phone and phone not in seen:
            nodes.append(GraphNode(id=phone, type="phone", label=phone))
            seen.add(phone)
        if phone:
            links.append(GraphLink(source=acc.account_number, target=phone, type="registered"))

    for tx in transactions:
        if tx.sender_account in seen and tx.receiver_account in seen:
            links.append(GraphLink(
                source=tx.sender_account,
                target=tx.receiver_account,
                type="transaction",
                value=tx.amount,
            ))

    for call in calls:
        if call.caller_number in seen and call.receiver_number in seen:
            links.append(GraphLink(
                source=call.caller_number,
                target=call.receiver_number,
                type="call",
                value=call.duration,
            ))

    return GraphResponse(nodes=nodes, links=links)


async def load_graph(session: AsyncSession) -> GraphResponse:
    """Read all three tables in insertion order and aggregate them."""
    accounts = (await session.execute(select(Account).order_by(Account.id))).scalars().all()
    transactions = (await session.execute(select(Transaction).order_by(Transaction.id))).scalars().all()
    calls = (await session.execute(select(CallRecord).order_by(CallRecord.id))).scalars().all()

    graph = build_graph(accounts, transactions, calls)
    log.debug("Graph built", nodes=len(graph.nodes), links=len(graph.links))
    return graph
