"""Shared Pydantic models for crptapi."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field

DOC_TYPE = "LP_INTRODUCE_GOODS"

# ── Enums ──


class TimeUnit(StrEnum):
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds."""
        return _UNIT_SECONDS[self]


_UNIT_SECONDS: dict[TimeUnit, float] = {
    TimeUnit.MILLISECONDS: 0.001,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


# ── Document models ──


def _date_to_iso(value: Any) -> Any:
    # YAML loads unquoted 2020-01-23 as datetime.date
    if isinstance(value, date):
        return value.isoformat()
    return value


IsoDate = Annotated[str, BeforeValidator(_date_to_iso)]


class Description(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    participant_inn: str | None = None


class Product(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    certificate_document: str | None = None
    certificate_document_date: IsoDate | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: IsoDate | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class DocumentMetadata(BaseModel):
    """Protocol fields sent with every document, independent of its products.

    Defaults are the placeholder values the reference client ships with;
    real deployments override them through configuration.
    """

    model_config = {"frozen": True}

    doc_id: str = "some_doc_id"
    doc_status: str = "some_doc_status"
    import_request: bool = True
    owner_inn: str = "some_owner_inn"
    participant_inn: str = "some_participant_inn"
    producer_inn: str = "some_producer_inn"
    production_date: IsoDate = "2020-01-23"
    production_type: str = "some_production_type"
    reg_date: IsoDate = "2020-01-23"
    reg_number: str = "some_reg_number"


class DocumentRequest(BaseModel):
    """Request body of the document-creation endpoint.

    Field names are the wire names, so ``model_dump_json()`` is the payload.
    """

    model_config = {"frozen": True}

    description: Description
    doc_id: str
    doc_status: str
    doc_type: Literal["LP_INTRODUCE_GOODS"] = DOC_TYPE
    import_request: bool
    owner_inn: str
    participant_inn: str
    producer_inn: str
    production_date: IsoDate
    production_type: str
    products: tuple[Product, ...] = Field(default_factory=tuple)
    reg_date: IsoDate
    reg_number: str


class DocumentInput(BaseModel):
    """Caller-supplied part of a document, as read from a document file.

    Unknown keys are rejected, so camelCase or misspelled field names fail
    validation instead of reaching the wire as nulls.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    description: Description
    products: tuple[Product, ...] = Field(default_factory=tuple)


# ── Transport models ──


class TransportRequest(BaseModel):
    url: str
    method: str = "POST"
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""


class TransportResponse(BaseModel):
    status_code: int
    body: str = ""


class SubmissionResult(BaseModel):
    status_code: int
    body: str = ""
