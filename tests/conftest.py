"""Pytest fixtures for testing"""

from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from credit_check_gateway.api.dependencies import get_identity_client, get_report_client
from credit_check_gateway.api.main import create_app
from credit_check_gateway.domain.exceptions import AuthenticationError
from credit_check_gateway.domain.models import CallerIdentity, InternalMetrics, RiskTier

VALID_TOKEN = "valid-token"


class StubIdentityClient:
    """Accepts VALID_TOKEN only"""

    async def verify_token(self, token: str) -> CallerIdentity:
        if token != VALID_TOKEN:
            raise AuthenticationError("token rejected")
        return CallerIdentity(uid="analyst-1", email="analyst@example.com")


class StubReportClient:
    """Returns a canned report, or raises a canned error"""

    def __init__(self):
        self.report: Dict[str, Any] = {}
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []

    async def get_report(self, document_type, number, sex=None) -> Dict[str, Any]:
        self.calls.append((document_type, number, sex))
        if self.error is not None:
            raise self.error
        return self.report


@pytest.fixture
def report_client() -> StubReportClient:
    return StubReportClient()


@pytest.fixture
def client(report_client: StubReportClient) -> TestClient:
    """Create FastAPI test client with stubbed collaborators"""
    app = create_app()
    app.dependency_overrides[get_identity_client] = StubIdentityClient
    app.dependency_overrides[get_report_client] = lambda: report_client
    return TestClient(app)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def make_metrics() -> Callable[..., InternalMetrics]:
    """Factory for InternalMetrics where every dimension is neutral unless overridden"""

    def _make(**overrides) -> InternalMetrics:
        fields = dict(
            full_name="TEST PERSON",
            coarse_tier=RiskTier.MEDIUM,
            total_capacity=0.0,
            monthly_commitment=0.0,
            monthly_income_estimate=0.0,
            formal_activity_months=0,
            worst_bureau_status_24m=None,
            has_formal_activity=False,
            has_registered_vehicles=False,
            has_registered_real_estate=False,
        )
        fields.update(overrides)
        return InternalMetrics(**fields)

    return _make


@pytest.fixture
def strong_medium_report() -> Dict[str, Any]:
    """MEDIUM tier report where every dimension scores at its best"""
    return {
        "identidad": {"nombre_completo": "PEREZ JUAN", "anios_inscripcion": 4},
        "condicionTributaria": {"monto_anual": 600000},
        "scoringInforme": {
            "scoring": 3,
            "credito": 100000,
            "deuda": 120000,  # 10000 / month
            "actividad": {"empleado": "SI", "autonomo": "NO"},
        },
        "bcra": {"resumen_historico": {"2025-01": {"peor_situacion": 1}, "2025-02": {"peor_situacion": "1"}}},
        "rodados": [{"dominio": "AA000AA"}],
        "inmuebles": [{"direccion": "CALLE 1"}],
    }
