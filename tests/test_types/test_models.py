"""Tests for document and transport models."""

from datetime import date

import pytest
from pydantic import ValidationError

from crptapi.types import (
    DOC_TYPE,
    Description,
    DocumentInput,
    DocumentMetadata,
    DocumentRequest,
    Product,
    TimeUnit,
)


class TestTimeUnit:
    def test_seconds(self):
        assert TimeUnit.MILLISECONDS.seconds == 0.001
        assert TimeUnit.SECONDS.seconds == 1.0
        assert TimeUnit.MINUTES.seconds == 60.0
        assert TimeUnit.HOURS.seconds == 3600.0
        assert TimeUnit.DAYS.seconds == 86400.0

    def test_from_string(self):
        assert TimeUnit("minutes") is TimeUnit.MINUTES

    def test_unknown_unit(self):
        with pytest.raises(ValueError):
            TimeUnit("fortnights")


class TestDocumentModels:
    def test_models_are_frozen(self):
        desc = Description(participant_inn="inn1")
        with pytest.raises(ValidationError):
            desc.participant_inn = "other"

        product = Product(uit_code="uit1")
        with pytest.raises(ValidationError):
            product.uit_code = "uit2"

    def test_product_fields_optional(self):
        product = Product()
        assert product.uit_code is None
        assert product.tnved_code is None

    def test_metadata_defaults(self):
        meta = DocumentMetadata()
        assert meta.doc_id == "some_doc_id"
        assert meta.import_request is True
        assert meta.production_date == "2020-01-23"

    def test_request_doc_type_is_fixed(self):
        request = DocumentRequest(
            **DocumentMetadata().model_dump(),
            description=Description(participant_inn="inn1"),
        )
        assert request.doc_type == DOC_TYPE == "LP_INTRODUCE_GOODS"

    def test_request_rejects_other_doc_type(self):
        with pytest.raises(ValidationError):
            DocumentRequest(
                **DocumentMetadata().model_dump(),
                description=Description(),
                doc_type="LP_SHIP_GOODS",
            )

    def test_products_accept_mappings(self):
        doc = DocumentInput(
            description={"participant_inn": "inn1"},
            products=[{"uit_code": "uit1"}, {"uit_code": "uit2"}],
        )
        assert isinstance(doc.products, tuple)
        assert [p.uit_code for p in doc.products] == ["uit1", "uit2"]

    def test_dates_become_iso_strings(self):
        product = Product(
            production_date=date(2020, 1, 23),
            certificate_document_date=date(2019, 12, 31),
        )
        assert product.production_date == "2020-01-23"
        assert product.certificate_document_date == "2019-12-31"
        assert DocumentMetadata(reg_date=date(2021, 5, 1)).reg_date == "2021-05-01"

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            Product(uitCode="uit1")
        with pytest.raises(ValidationError):
            Description(participantInn="inn1")
        with pytest.raises(ValidationError):
            DocumentInput(description={}, product=[])
