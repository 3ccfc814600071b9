"""Pydantic schemas for API request/response validation"""

import math
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from credit_check_gateway.domain.models import (
    DecisionStatus,
    DocumentType,
    ReportAssessment,
    RiskTier,
)


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/assessment"""

    document_type: DocumentType = Field(..., description="cuit, cuil or dni")
    number: str = Field(..., min_length=1, description="Document number (DNI or CUIT/CUIL)")
    sex: Optional[str] = Field(None, description="M or F, only used for dni lookups")

    @field_validator("document_type", mode="before")
    @classmethod
    def lowercase_document_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("number")
    @classmethod
    def strip_number(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("number must not be blank")
        return value


class DecisionMetricsSchema(BaseModel):
    """Inputs and ratios the internal decision was computed from"""

    total_capacity: float
    monthly_commitment: float
    monthly_income_estimate: float
    usage: Optional[float] = None
    dti: Optional[float] = None
    formal_activity_months: int
    worst_bureau_status_24m: Optional[int] = None
    has_formal_activity: bool
    has_registered_vehicles: bool
    has_registered_real_estate: bool

    @field_serializer("usage", "dti")
    def finite_ratio(self, value: Optional[float]) -> Optional[float]:
        # JSON has no infinity; an overflowed ratio is already explained in the reasons
        return value if value is not None and math.isfinite(value) else None


class RiskDecisionSchema(BaseModel):
    """Internal evaluation of a MEDIUM tier report"""

    status: DecisionStatus
    score: int = Field(..., ge=0, le=100)
    reasons: List[str]
    metrics: DecisionMetricsSchema


class AssessmentResponse(BaseModel):
    """Response for POST /v1/assessment"""

    full_name: str
    number: str
    document_type: DocumentType
    coarse_tier: RiskTier
    decision: Optional[RiskDecisionSchema] = None

    @classmethod
    def from_assessment(
        cls,
        assessment: ReportAssessment,
        number: str,
        document_type: DocumentType,
    ) -> "AssessmentResponse":
        decision = None
        if assessment.decision is not None:
            d = assessment.decision
            m = d.metrics
            decision = RiskDecisionSchema(
                status=d.status,
                score=d.score,
                reasons=list(d.reasons),
                metrics=DecisionMetricsSchema(
                    total_capacity=m.total_capacity,
                    monthly_commitment=m.monthly_commitment,
                    monthly_income_estimate=m.monthly_income_estimate,
                    usage=m.usage,
                    dti=m.dti,
                    formal_activity_months=m.formal_activity_months,
                    worst_bureau_status_24m=m.worst_bureau_status_24m,
                    has_formal_activity=m.has_formal_activity,
                    has_registered_vehicles=m.has_registered_vehicles,
                    has_registered_real_estate=m.has_registered_real_estate,
                ),
            )

        return cls(
            full_name=assessment.full_name,
            number=number,
            document_type=document_type,
            coarse_tier=assessment.coarse_tier,
            decision=decision,
        )
