"""RPC Endpoint — POST /api/rpc/{operation}, JSON body in, JSON body out.

Invariants:
    - The path segment is the only discriminator; the verb is always POST
    - Session identity resolved once per request and passed to dispatch explicitly
    - Body parsing never fails the request here: empty body means {}, malformed
      JSON reaches the handler as None so the gate still runs before validation

Design Decisions:
    - Raw Request over a typed Body parameter: FastAPI would validate the body
      before the handler runs, putting 400 ahead of 401/403 for admin operations
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogrpc.core.domain_types import SessionIdentity
from blogrpc.infrastructure.database import get_db
from blogrpc.infrastructure.identity import get_session_identity
from blogrpc.services.rpc_dispatch import RpcDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/rpc", tags=["rpc"])


async def read_payload(request: Request) -> object:
    """Parse the JSON body; {} when empty, None when malformed."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError:
        logger.info(
            "Malformed JSON body", extra={"path": request.url.path},
        )
        return None


@router.post("/{operation}")
async def call_operation(
    operation: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: SessionIdentity | None = Depends(get_session_identity),
):
    """Dispatch one RPC call."""
    payload = await read_payload(request)
    return await RpcDispatch.for_session(db).execute(
        operation, payload, identity,
    )
