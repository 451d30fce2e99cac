"""Service layer for the Speedy proxy.

Credential resolution, envelope building, shipment normalization,
transport and response classification. The pipeline is assembled in
speedy_gateway.SpeedyGateway.
"""
