"""Canonical Speedy API constants.

Single source of truth for the upstream base address, endpoint paths,
envelope field names and the payer-role vocabulary. Payload-building and
classification modules import from here instead of using inline strings.

Follows the Enum + alias lookup + frozenset pattern.
"""

from enum import Enum


# ---------------------------------------------------------------------------
# Upstream endpoint
# ---------------------------------------------------------------------------

SPEEDY_BASE_URL = "https://api.speedy.bg/v1"

SITE_PATH = "/location/site/"
OFFICE_PATH = "/location/office/"
SHIPMENT_PATH = "/shipment/"
PRINT_PATH = "/print/"

DEFAULT_TIMEOUT_SECONDS = 30.0

# ---------------------------------------------------------------------------
# Envelope fields
# ---------------------------------------------------------------------------

IDENTITY_FIELD = "userName"
SECRET_FIELD = "password"
LOCALE_FIELD = "language"

CREDENTIAL_FIELDS: frozenset[str] = frozenset({IDENTITY_FIELD, SECRET_FIELD})

DEFAULT_LANGUAGE = "BG"
DEFAULT_COUNTRY_ID = 100  # Bulgaria

SHIPMENT_DATE_FIELD = "date"
SHIPMENT_DATE_FORMAT = "%Y-%m-%d"

# ---------------------------------------------------------------------------
# Response classification
# ---------------------------------------------------------------------------

LABEL_CONTENT_TYPE = "application/pdf"

# Top-level keys Speedy uses to report a rejection inside an HTTP 200 body
ERROR_MARKER_FIELDS: tuple[str, ...] = ("error", "errors", "context", "message")


# ---------------------------------------------------------------------------
# Payer roles
# ---------------------------------------------------------------------------


class PayerRole(str, Enum):
    """Party responsible for a charge on a Speedy shipment."""

    SENDER = "SENDER"
    RECIPIENT = "RECIPIENT"
    THIRD_PARTY = "THIRD_PARTY"


DEFAULT_PAYER_ROLE = PayerRole.SENDER

# Legacy and misspelled spellings seen from older worker builds.
# Keys are already upper-cased with separators folded to "_".
PAYER_ROLE_ALIASES: dict[str, PayerRole] = {
    "CONTRACT_CLIENT": PayerRole.SENDER,
    "CONTRACTCLIENT": PayerRole.SENDER,
    "CONTRACT_CLIENTS": PayerRole.SENDER,
    "CONTRACT_CLEINT": PayerRole.SENDER,
    "CONTRACT_CLIEN": PayerRole.SENDER,
    "CONTRAT_CLIENT": PayerRole.SENDER,
    "CLIENT": PayerRole.SENDER,
    "THIRDPARTY": PayerRole.THIRD_PARTY,
}

# (parent object, field) pairs holding a PayerRole in a shipment request
PAYER_ROLE_FIELDS: tuple[tuple[str, str], ...] = (
    ("payment", "courierServicePayer"),
    ("payment", "declaredValuePayer"),
    ("optionsBeforePayment", "returnShipmentPayer"),
)
