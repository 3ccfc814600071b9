"""Risk decision engine - core business logic for MEDIUM tier credit reports"""

from typing import Any, List, Sequence, Tuple

from credit_check_gateway.domain.models import (
    DecisionMetrics,
    DecisionStatus,
    InternalMetrics,
    ReportAssessment,
    RiskDecision,
    RiskTier,
)
from credit_check_gateway.domain.normalizer import normalize
from credit_check_gateway.domain.rules import (
    DEFAULT_RULES,
    Rule,
    capacity_usage,
    debt_to_income,
)

# Center of the 0-100 range: a MEDIUM report starts truly ambiguous
BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

APPROVAL_THRESHOLD = 70
REVIEW_THRESHOLD = 55


def evaluate_rules(
    metrics: InternalMetrics,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> Tuple[int, List[str]]:
    """
    Fold the rules in order starting from BASE_SCORE.

    The running total is not bounded here; it may leave [0, 100] and come back.

    Returns: (raw_score, reasons)
    """
    score = BASE_SCORE
    reasons: List[str] = []
    for rule in rules:
        outcome = rule(metrics)
        score += outcome.delta
        reasons.append(outcome.reason)
    return score, reasons


def clamp_score(raw_score: int) -> int:
    """Bound the final score to [0, 100]"""
    return max(MIN_SCORE, min(MAX_SCORE, raw_score))


def determine_status(score: int) -> DecisionStatus:
    """
    Map the clamped score to a decision status.

    - 70+:   APPROVED
    - 55-69: MANUAL_REVIEW
    - < 55:  REJECTED
    """
    if score >= APPROVAL_THRESHOLD:
        return DecisionStatus.APPROVED
    elif score >= REVIEW_THRESHOLD:
        return DecisionStatus.MANUAL_REVIEW
    else:
        return DecisionStatus.REJECTED


def snapshot_metrics(metrics: InternalMetrics) -> DecisionMetrics:
    """Capture the inputs and derived ratios a decision is based on"""
    return DecisionMetrics(
        total_capacity=metrics.total_capacity,
        monthly_commitment=metrics.monthly_commitment,
        monthly_income_estimate=metrics.monthly_income_estimate,
        usage=capacity_usage(metrics),
        dti=debt_to_income(metrics),
        formal_activity_months=metrics.formal_activity_months,
        worst_bureau_status_24m=metrics.worst_bureau_status_24m,
        has_formal_activity=metrics.has_formal_activity,
        has_registered_vehicles=metrics.has_registered_vehicles,
        has_registered_real_estate=metrics.has_registered_real_estate,
    )


def decide(metrics: InternalMetrics) -> RiskDecision:
    """
    Score normalized metrics and produce an explainable decision.

    Deterministic and side-effect free; one reason per rule.
    """
    raw_score, reasons = evaluate_rules(metrics)
    score = clamp_score(raw_score)

    return RiskDecision(
        score=score,
        status=determine_status(score),
        reasons=tuple(reasons),
        metrics=snapshot_metrics(metrics),
    )


def assess_report(report: Any) -> ReportAssessment:
    """
    Main entry point: normalize an external report and, for MEDIUM tier
    reports only, run the internal decision.
    """
    metrics = normalize(report)
    decision = decide(metrics) if metrics.coarse_tier is RiskTier.MEDIUM else None

    return ReportAssessment(
        full_name=metrics.full_name,
        coarse_tier=metrics.coarse_tier,
        decision=decision,
    )
