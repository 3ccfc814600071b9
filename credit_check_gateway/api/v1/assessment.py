"""POST /v1/assessment - credit report risk assessment endpoint"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request

from credit_check_gateway.api.dependencies import get_current_caller, get_report_client, get_request_id
from credit_check_gateway.api.v1.schemas import AssessmentRequest, AssessmentResponse
from credit_check_gateway.domain.exceptions import (
    MalformedReportError,
    ProviderConfigurationError,
    ReportProviderError,
    ReportProviderTimeout,
)
from credit_check_gateway.domain.models import CallerIdentity
from credit_check_gateway.domain.scoring import assess_report
from credit_check_gateway.infrastructure.clients.report_provider import ReportProviderClient
from credit_check_gateway.infrastructure.observability.logging import log_assessment
from credit_check_gateway.infrastructure.observability.metrics import (
    provider_fetch_failures_counter,
    record_assessment,
)

router = APIRouter()


@router.post("/assessment", response_model=AssessmentResponse)
async def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    caller: CallerIdentity = Depends(get_current_caller),
    report_client: ReportProviderClient = Depends(get_report_client),
):
    """
    Assess the credit risk of a person or entity.

    Flow:
    1. Fetch the credit report from the external provider
    2. Normalize it and derive the coarse risk tier
    3. For MEDIUM tier only, compute the internal score and reasons
    4. Return tier and decision
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Fetch report document
        report = await report_client.get_report(
            request_body.document_type,
            request_body.number,
            request_body.sex,
        )

        # 2-3. Normalize and decide
        assessment = assess_report(report)

    except ProviderConfigurationError as e:
        logging.error(f"Provider configuration error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Report provider is not configured")

    except ReportProviderTimeout as e:
        provider_fetch_failures_counter.inc()
        logging.error(f"Report provider timeout: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Report provider unavailable")

    except ReportProviderError as e:
        provider_fetch_failures_counter.inc()
        logging.error(f"Report provider error: {e}", extra={"request_id": request_id, "upstream_detail": e.detail})
        raise HTTPException(
            status_code=e.status_code or 502,
            detail={"error": "Report provider error", "upstream_detail": e.detail},
        )

    except MalformedReportError as e:
        provider_fetch_failures_counter.inc()
        logging.error(f"Malformed provider response: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    decision = assessment.decision
    status = decision.status.value if decision else None
    score = decision.score if decision else None
    duration_ms = (time.time() - start_time) * 1000
    record_assessment(assessment.coarse_tier.value, status, score)
    log_assessment(request_id, caller.uid, assessment.coarse_tier.value, status, score, duration_ms)

    return AssessmentResponse.from_assessment(
        assessment,
        number=request_body.number,
        document_type=request_body.document_type,
    )
