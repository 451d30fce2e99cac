"""FastAPI route for label printing.

Passes the PDF rendered by Speedy straight through to the caller.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from speedy_proxy.api.dependencies import get_gateway, get_settings
from speedy_proxy.api.routes._failures import raise_failure
from speedy_proxy.api.schemas import ForwardRequest
from speedy_proxy.config import ProxySettings
from speedy_proxy.services.speedy_gateway import SpeedyGateway

router = APIRouter(tags=["labels"])


@router.post("/print")
async def print_label(
    payload: ForwardRequest,
    gateway: SpeedyGateway = Depends(get_gateway),
    settings: ProxySettings = Depends(get_settings),
) -> Response:
    """Render shipping labels for the given parcels.

    Returns:
        Response with the label bytes and the label media type.
    """
    result = await gateway.render_label(
        payload.business_fields(),
        override=payload.override(),
        language=payload.language,
    )
    if not result.ok:
        raise_failure(
            result,
            "print",
            expected_content_type=settings.speedy.label_content_type,
        )
    return Response(
        content=result.content,
        media_type=settings.speedy.label_content_type,
    )
