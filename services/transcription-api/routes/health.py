"""Liveness probe endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dependencies import get_provider_chain, get_storage_configured
from handlers import ProviderChain
from response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse)
def health(
    provider_chain: Annotated[ProviderChain, Depends(get_provider_chain)],
    storage_configured: Annotated[bool, Depends(get_storage_configured)],
) -> HealthResponse:
    """Returns static status plus which providers are configured."""
    return HealthResponse(
        providers=provider_chain.configured_providers,
        storage=storage_configured,
    )
