"""Unit tests for the report provider and identity HTTP clients"""

import json

import httpx
import pytest

from credit_check_gateway.domain.exceptions import (
    AuthenticationError,
    MalformedReportError,
    ProviderConfigurationError,
    ReportProviderError,
    ReportProviderTimeout,
)
from credit_check_gateway.domain.models import CallerIdentity, DocumentType
from credit_check_gateway.infrastructure.clients.identity import IdentityClient
from credit_check_gateway.infrastructure.clients.report_provider import (
    DNI_REPORT_PATH,
    TAX_ID_REPORT_PATH,
    ReportProviderClient,
)

BASE_URL = "http://provider.test"
REPORT = {"identidad": {"nombre_completo": "PEREZ JUAN"}}


def envelope(report):
    return {"status": "success", "message": "Informe pedido", "data": {"id": 1, "informe": report}}


def provider_client(handler, api_key="test-key"):
    return ReportProviderClient(
        base_url=BASE_URL,
        api_key=api_key,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_get_report_by_tax_id():
    """cuit/cuil lookups post a multipart form to the tax id endpoint"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content
        return httpx.Response(200, json=envelope(REPORT))

    report = await provider_client(handler).get_report(DocumentType.CUIL, "20111111112")

    assert report == REPORT
    assert seen["path"] == TAX_ID_REPORT_PATH
    assert seen["content_type"].startswith("multipart/form-data")
    assert b'name="cuit"\r\n\r\n20111111112\r\n' in seen["body"]
    assert b'name="apiKey"\r\n\r\ntest-key\r\n' in seen["body"]
    assert b'name="tipo"\r\n\r\nnormal\r\n' in seen["body"]


@pytest.mark.parametrize("sex,expected", [("F", b"F"), ("M", b"M"), (None, b"M"), ("X", b"M")])
async def test_get_report_by_dni(sex, expected):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(200, json=envelope(REPORT))

    await provider_client(handler).get_report(DocumentType.DNI, "12345678", sex)

    assert seen["path"] == DNI_REPORT_PATH
    assert b'name="dni"\r\n\r\n12345678\r\n' in seen["body"]
    assert b'name="sexo"\r\n\r\n' + expected + b"\r\n" in seen["body"]


async def test_get_report_upstream_error_keeps_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="CUIT inexistente")

    with pytest.raises(ReportProviderError) as exc_info:
        await provider_client(handler).get_report(DocumentType.CUIT, "1")

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "CUIT inexistente"


async def test_get_report_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(ReportProviderTimeout):
        await provider_client(handler).get_report(DocumentType.CUIT, "1")


async def test_get_report_transport_error_has_no_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ReportProviderError) as exc_info:
        await provider_client(handler).get_report(DocumentType.CUIT, "1")

    assert exc_info.value.status_code is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"status": "success", "data": {}}),
        httpx.Response(200, json={"status": "error", "message": "sin saldo"}),
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, text="<html>maintenance</html>"),
    ],
)
async def test_get_report_without_report_document(response):
    with pytest.raises(MalformedReportError):
        await provider_client(lambda request: response).get_report(DocumentType.CUIT, "1")


async def test_get_report_requires_api_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ProviderConfigurationError):
        await provider_client(handler, api_key="").get_report(DocumentType.CUIT, "1")


def identity_client(handler):
    return IdentityClient(verify_url="http://identity.test/verify", transport=httpx.MockTransport(handler))


async def test_verify_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"id_token": "abc"}
        return httpx.Response(200, json={"uid": "u-1", "email": "u@example.com"})

    identity = await identity_client(handler).verify_token("abc")

    assert identity == CallerIdentity(uid="u-1", email="u@example.com")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": "expired"}),
        httpx.Response(200, json={"email": "u@example.com"}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_verify_token_rejections(response):
    with pytest.raises(AuthenticationError):
        await identity_client(lambda request: response).verify_token("abc")
