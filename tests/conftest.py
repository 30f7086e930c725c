import httpx
import pytest

from crptapi.transport.client import HttpxTransport
from crptapi.types import Description, Product


@pytest.fixture
def sample_description():
    return Description(participant_inn="inn1")


@pytest.fixture
def sample_products():
    return [
        Product(
            certificate_document="doc1",
            certificate_document_date="2020-01-23",
            certificate_document_number="num1",
            owner_inn="owner1",
            producer_inn="producer1",
            production_date="2020-01-23",
            tnved_code="code1",
            uit_code="uit1",
            uitu_code="uitu1",
        ),
        Product(owner_inn="owner2", uit_code="uit2"),
    ]


@pytest.fixture
def recorded_requests():
    """Requests seen by the fake API, in arrival order."""
    return []


@pytest.fixture
def make_transport(recorded_requests):
    """Build an HttpxTransport whose network is an in-process fake."""

    def factory(status_code=200, body="{}"):
        def handler(request):
            recorded_requests.append(request)
            return httpx.Response(status_code, text=body)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        return HttpxTransport(client=client)

    return factory


@pytest.fixture
def sample_document_yaml(tmp_path):
    """Write a minimal document YAML and return its path."""
    content = """
description:
  participant_inn: inn1
products:
  - certificate_document: doc1
    certificate_document_date: "2020-01-23"
    certificate_document_number: num1
    owner_inn: owner1
    producer_inn: producer1
    production_date: "2020-01-23"
    tnved_code: code1
    uit_code: uit1
    uitu_code: uitu1
"""
    path = tmp_path / "document.yaml"
    path.write_text(content)
    return path
