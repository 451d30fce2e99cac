"""FastAPI dependencies shared by the route modules."""

from fastapi import Request

from speedy_proxy.config import ProxySettings
from speedy_proxy.services.speedy_gateway import SpeedyGateway


def get_settings(request: Request) -> ProxySettings:
    """Settings loaded once by create_app()."""
    return request.app.state.settings


def get_gateway(request: Request) -> SpeedyGateway:
    """Gateway bound to the process-wide transport."""
    return request.app.state.gateway
