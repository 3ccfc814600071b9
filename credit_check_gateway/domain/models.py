"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class RiskTier(str, Enum):
    """Coarse risk tier assigned by the report provider"""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DecisionStatus(str, Enum):
    """Outcome of the internal evaluation of a MEDIUM tier report"""

    APPROVED = "APPROVED"
    MANUAL_REVIEW = "MANUAL_REVIEW"
    REJECTED = "REJECTED"


class DocumentType(str, Enum):
    """Identifier kinds accepted by the report provider"""

    CUIT = "cuit"
    CUIL = "cuil"
    DNI = "dni"


@dataclass(frozen=True)
class InternalMetrics:
    """Normalized metrics extracted from an external credit report"""

    full_name: str
    coarse_tier: RiskTier
    total_capacity: float
    monthly_commitment: float
    monthly_income_estimate: float
    formal_activity_months: int
    worst_bureau_status_24m: Optional[int]  # None = no bureau data, never "best"
    has_formal_activity: bool
    has_registered_vehicles: bool
    has_registered_real_estate: bool


@dataclass(frozen=True)
class RuleOutcome:
    """Contribution of a single scoring dimension"""

    delta: int
    reason: str


@dataclass(frozen=True)
class DecisionMetrics:
    """Snapshot of the inputs and ratios a decision was computed from"""

    total_capacity: float
    monthly_commitment: float
    monthly_income_estimate: float
    usage: Optional[float]
    dti: Optional[float]
    formal_activity_months: int
    worst_bureau_status_24m: Optional[int]
    has_formal_activity: bool
    has_registered_vehicles: bool
    has_registered_real_estate: bool


@dataclass(frozen=True)
class RiskDecision:
    """Output of the internal evaluation"""

    score: int
    status: DecisionStatus
    reasons: Tuple[str, ...]
    metrics: DecisionMetrics


@dataclass(frozen=True)
class ReportAssessment:
    """Result of assessing one external report"""

    full_name: str
    coarse_tier: RiskTier
    decision: Optional[RiskDecision] = None


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller as reported by the identity service"""

    uid: str
    email: Optional[str] = None
