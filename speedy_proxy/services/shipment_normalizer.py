"""Shipment payload normalization.

Speedy rejects shipment requests whose payer fields hold anything outside
SENDER / RECIPIENT / THIRD_PARTY, and older worker builds still send the
legacy CONTRACT_CLIENT role. Rather than failing those requests, payer
roles are repaired here and a missing payment block or shipment date is
filled in. Normalization never raises.

Example:
    from speedy_proxy.services.shipment_normalizer import normalize_shipment

    payload = normalize_shipment({"payment": {"courierServicePayer": "contract_client"}})
    payload["payment"]["courierServicePayer"]  # "SENDER"
"""

import re
from datetime import date
from typing import Any

from speedy_proxy.services.speedy_constants import (
    DEFAULT_PAYER_ROLE,
    PAYER_ROLE_ALIASES,
    PAYER_ROLE_FIELDS,
    SHIPMENT_DATE_FIELD,
    SHIPMENT_DATE_FORMAT,
    PayerRole,
)

_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_payer_role(value: Any) -> str:
    """Map a raw payer value onto the PayerRole vocabulary.

    Case-insensitive; spaces and dashes are treated as underscores. Known
    aliases are looked up, and anything unrecognized (including None and
    non-strings) becomes SENDER.

    Args:
        value: Raw field value from the caller.

    Returns:
        One of "SENDER", "RECIPIENT", "THIRD_PARTY".
    """
    if not isinstance(value, str):
        return DEFAULT_PAYER_ROLE.value

    key = _SEPARATORS.sub("_", value.strip()).upper()
    if key in PayerRole.__members__:
        return PayerRole[key].value
    return PAYER_ROLE_ALIASES.get(key, DEFAULT_PAYER_ROLE).value


def normalize_shipment(
    business_fields: dict[str, Any] | None,
    today: date | None = None,
) -> dict[str, Any]:
    """Return a normalized copy of a shipment-creation payload.

    - payment.courierServicePayer is always present and canonical.
    - payment.declaredValuePayer and
      optionsBeforePayment.returnShipmentPayer are canonicalized only
      when present.
    - A missing or empty shipment date is set to today (server clock).

    Args:
        business_fields: Caller payload. Not mutated.
        today: Date to inject; defaults to date.today().

    Returns:
        New payload dict. Touched nested objects are copies.
    """
    payload = dict(business_fields or {})

    payment = payload.get("payment")
    if not isinstance(payment, dict):
        payment = {}
    payment = dict(payment)
    payment["courierServicePayer"] = normalize_payer_role(
        payment.get("courierServicePayer")
    )
    payload["payment"] = payment

    for parent_key, field in PAYER_ROLE_FIELDS:
        parent = payload.get(parent_key)
        if not isinstance(parent, dict) or field not in parent:
            continue
        parent = dict(parent)
        parent[field] = normalize_payer_role(parent[field])
        payload[parent_key] = parent

    if not payload.get(SHIPMENT_DATE_FIELD):
        payload[SHIPMENT_DATE_FIELD] = (today or date.today()).strftime(
            SHIPMENT_DATE_FORMAT
        )

    return payload
