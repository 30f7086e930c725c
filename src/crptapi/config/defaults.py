"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Endpoint
DEFAULT_API_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"
DEFAULT_TIMEOUT = 30.0

# Rate limiting
DEFAULT_TIME_UNIT = "minutes"
DEFAULT_REQUEST_LIMIT = 10

# Document metadata
DEFAULT_DOC_ID = "some_doc_id"
DEFAULT_DOC_STATUS = "some_doc_status"
DEFAULT_IMPORT_REQUEST = True
DEFAULT_OWNER_INN = "some_owner_inn"
DEFAULT_PARTICIPANT_INN = "some_participant_inn"
DEFAULT_PRODUCER_INN = "some_producer_inn"
DEFAULT_PRODUCTION_DATE = "2020-01-23"
DEFAULT_PRODUCTION_TYPE = "some_production_type"
DEFAULT_REG_DATE = "2020-01-23"
DEFAULT_REG_NUMBER = "some_reg_number"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"

METADATA_KEYS = (
    "doc_id",
    "doc_status",
    "import_request",
    "owner_inn",
    "participant_inn",
    "producer_inn",
    "production_date",
    "production_type",
    "reg_date",
    "reg_number",
)


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "api_url": DEFAULT_API_URL,
        "timeout": DEFAULT_TIMEOUT,
        "time_unit": DEFAULT_TIME_UNIT,
        "request_limit": DEFAULT_REQUEST_LIMIT,
        "doc_id": DEFAULT_DOC_ID,
        "doc_status": DEFAULT_DOC_STATUS,
        "import_request": DEFAULT_IMPORT_REQUEST,
        "owner_inn": DEFAULT_OWNER_INN,
        "participant_inn": DEFAULT_PARTICIPANT_INN,
        "producer_inn": DEFAULT_PRODUCER_INN,
        "production_date": DEFAULT_PRODUCTION_DATE,
        "production_type": DEFAULT_PRODUCTION_TYPE,
        "reg_date": DEFAULT_REG_DATE,
        "reg_number": DEFAULT_REG_NUMBER,
        "log_level": DEFAULT_LOG_LEVEL,
    }
