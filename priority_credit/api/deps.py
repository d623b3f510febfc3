"""
FastAPI dependencies for database sessions, request metadata and the
registry services.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from priority_credit.database import get_db
from priority_credit.kernel.principal import normalize_principal
from priority_credit.kernel.state import RegistryNotInitializedError, RegistryState
from priority_credit.orchestration.block_processor import BlockProcessor


DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_client_ip(request: Request) -> Optional[str]:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


async def get_block_processor(db: DbSession) -> BlockProcessor:
    return BlockProcessor(db)


Processor = Annotated[BlockProcessor, Depends(get_block_processor)]


async def get_registry_state(processor: Processor) -> RegistryState:
    """Current registry state. Reads never run genesis; startup does."""
    try:
        return await processor.load_state()
    except RegistryNotInitializedError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Registry not initialized",
        )


CurrentState = Annotated[RegistryState, Depends(get_registry_state)]


def principal_path(principal: Annotated[str, Path(max_length=150)]) -> str:
    """Path parameter that must be a principal, else 422."""
    normalized = normalize_principal(principal)
    if normalized is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Malformed principal",
        )
    return normalized


PrincipalPath = Annotated[str, Depends(principal_path)]
