"""Pod provider catalog endpoint.

Lists the pod providers users may log in or sign up with, so clients can
build their provider picker from configuration.
"""

from fastapi import APIRouter, Depends

from src.providers.registry import PodProviderRegistry, get_provider_registry
from src.schemas.common import ProviderListResponse

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("", response_model=ProviderListResponse)
async def list_providers(
    registry: PodProviderRegistry = Depends(get_provider_registry),
) -> ProviderListResponse:
    """List viable pod provider endpoints."""
    return ProviderListResponse(providers=registry.list_providers())
