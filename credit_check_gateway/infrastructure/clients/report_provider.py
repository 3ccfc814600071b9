"""Report provider HTTP client for fetching third-party credit reports"""

from typing import Any, Dict, Optional

import httpx

from credit_check_gateway.config import settings
from credit_check_gateway.domain.exceptions import (
    MalformedReportError,
    ProviderConfigurationError,
    ReportProviderError,
    ReportProviderTimeout,
)
from credit_check_gateway.domain.models import DocumentType
from credit_check_gateway.infrastructure.observability.metrics import provider_latency_histogram

TAX_ID_REPORT_PATH = "/api/informeApi/obtenerInforme"
DNI_REPORT_PATH = "/api/informeApi/obtenerInformeDni"

VALID_SEXES = ("M", "F")


class ReportProviderClient:
    """Client for the external credit report API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.report_provider_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.report_provider_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _build_form(self, document_type: DocumentType, number: str, sex: Optional[str]) -> tuple[str, Dict[str, Any]]:
        """Return (path, multipart fields) for the document type"""
        fields = {"apiKey": self.api_key, "tipo": "normal"}

        if document_type in (DocumentType.CUIT, DocumentType.CUIL):
            fields["cuit"] = number
            return TAX_ID_REPORT_PATH, fields

        fields["dni"] = number
        fields["sexo"] = sex if sex in VALID_SEXES else settings.default_dni_sex
        return DNI_REPORT_PATH, fields

    async def get_report(
        self,
        document_type: DocumentType,
        number: str,
        sex: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch the credit report document for a person or entity.

        Returns the report found under data.informe of the provider envelope.

        Raises:
            ProviderConfigurationError: API key not configured
            ReportProviderTimeout: Provider did not answer in time
            ReportProviderError: Transport failure or non-2xx response
            MalformedReportError: Response has no report document
        """
        if not self.api_key:
            raise ProviderConfigurationError("Report provider API key is not configured")

        path, fields = self._build_form(document_type, number, sex)
        # (None, value) parts force multipart/form-data without file names
        multipart = {name: (None, str(value)) for name, value in fields.items()}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
            try:
                with provider_latency_histogram.time():
                    response = await client.post(f"{self.base_url}{path}", files=multipart)
                response.raise_for_status()
                payload = response.json()

            except httpx.TimeoutException as e:
                raise ReportProviderTimeout(f"Report provider timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ReportProviderError(
                    f"Report provider error: {e.response.status_code}",
                    status_code=e.response.status_code,
                    detail=e.response.text,
                ) from e
            except httpx.RequestError as e:
                raise ReportProviderError(f"Report provider unreachable: {e}") from e
            except ValueError as e:
                raise MalformedReportError(f"Report provider returned invalid JSON: {e}") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        report = data.get("informe") if isinstance(data, dict) else None
        if not isinstance(report, dict):
            raise MalformedReportError("Report provider response does not contain data.informe")

        return report
