"""FastAPI routes for Speedy site and office lookups.

POST bodies carry the Speedy request as-is. The GET shortcuts are kept
only to tell old callers to switch: credentials in a query string end
up in access logs.
"""

from fastapi import APIRouter, Depends

from speedy_proxy.api.dependencies import get_gateway
from speedy_proxy.api.routes._failures import raise_failure
from speedy_proxy.api.schemas import ForwardRequest
from speedy_proxy.errors.formatter import ProxyError
from speedy_proxy.services.speedy_gateway import SpeedyGateway

router = APIRouter(tags=["location"])


@router.get("/sites")
def sites_shortcut() -> None:
    """Disabled GET shortcut for site lookup."""
    raise ProxyError.from_code(
        "E-2003", status_code=400, path="GET /sites", replacement="/location/site"
    )


@router.get("/offices")
def offices_shortcut() -> None:
    """Disabled GET shortcut for office lookup."""
    raise ProxyError.from_code(
        "E-2003", status_code=400, path="GET /offices", replacement="/location/office"
    )


@router.post("/location/site")
async def location_site(
    payload: ForwardRequest,
    gateway: SpeedyGateway = Depends(get_gateway),
) -> dict:
    """Find Speedy sites (towns/villages) by name.

    Returns:
        ``{"sites": [...]}``; failures carry ``"sites": []`` alongside
        the error fields.
    """
    result = await gateway.lookup(
        "site",
        payload.business_fields(),
        override=payload.override(),
        language=payload.language,
    )
    if not result.ok:
        raise_failure(result, "location/site", sites=[])
    return {"sites": result.data or []}


@router.post("/location/office")
async def location_office(
    payload: ForwardRequest,
    gateway: SpeedyGateway = Depends(get_gateway),
) -> dict:
    """List Speedy offices in a site.

    Returns:
        ``{"offices": [...]}``; failures carry ``"offices": []`` alongside
        the error fields.
    """
    result = await gateway.lookup(
        "office",
        payload.business_fields(),
        override=payload.override(),
        language=payload.language,
    )
    if not result.ok:
        raise_failure(result, "location/office", offices=[])
    return {"offices": result.data or []}
