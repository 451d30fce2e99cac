"""FastAPI routes for shipment creation."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from speedy_proxy.api.dependencies import get_gateway
from speedy_proxy.api.routes._failures import raise_failure
from speedy_proxy.api.schemas import ForwardRequest
from speedy_proxy.services.speedy_gateway import SpeedyGateway

router = APIRouter(tags=["shipment"])


async def _create(payload: ForwardRequest, gateway: SpeedyGateway, operation: str) -> JSONResponse:
    result = await gateway.create_shipment(
        payload.business_fields(),
        override=payload.override(),
        language=payload.language,
    )
    if not result.ok:
        raise_failure(result, operation)
    return JSONResponse(content=result.data)


@router.post("/shipment")
async def create_shipment(
    payload: ForwardRequest,
    gateway: SpeedyGateway = Depends(get_gateway),
) -> JSONResponse:
    """Create a Speedy shipment and return the full carrier response.

    Payer roles are normalized and a missing shipment date is set to
    today before the request is forwarded.
    """
    return await _create(payload, gateway, "shipment")


@router.post("/createShipment")
async def create_shipment_legacy(
    payload: ForwardRequest,
    gateway: SpeedyGateway = Depends(get_gateway),
) -> JSONResponse:
    """Backward-compatible alias of POST /shipment."""
    return await _create(payload, gateway, "createShipment")
