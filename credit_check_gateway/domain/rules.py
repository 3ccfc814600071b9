"""
Scoring rules for MEDIUM tier reports.

Each rule consumes the normalized metrics and returns a RuleOutcome with a
score delta and exactly one human-readable reason, including when the delta
is zero. Weights and thresholds are fixed policy; changing them is a policy
revision.

Convention: positive delta = lower risk.
"""

import math
from typing import Callable, Optional, Tuple

from credit_check_gateway.domain.models import InternalMetrics, RuleOutcome

Rule = Callable[[InternalMetrics], RuleOutcome]


def _percent(ratio: float) -> str:
    # Ratios overflow to inf when a tiny capacity or income divides a huge debt
    if not math.isfinite(ratio):
        return "over 100%"
    return f"{ratio * 100:.1f}%"


def capacity_usage(metrics: InternalMetrics) -> Optional[float]:
    """Monthly commitment over total credit capacity, None without capacity data"""
    if metrics.total_capacity > 0:
        return metrics.monthly_commitment / metrics.total_capacity
    return None


def debt_to_income(metrics: InternalMetrics) -> Optional[float]:
    """Monthly commitment over estimated monthly income, None without income data"""
    if metrics.monthly_income_estimate > 0:
        return metrics.monthly_commitment / metrics.monthly_income_estimate
    return None


def bureau_history_rule(metrics: InternalMetrics) -> RuleOutcome:
    """
    Worst bureau situation over the last 24 months (higher = worse).

    - >= 3: -30 (derogatory mark)
    - 2:    +5  (minor mark, regularized)
    - 1:    +15 (clean history)
    - < 1:  +15 (no adverse code reported)
    - none: 0   (no bureau data)
    """
    status = metrics.worst_bureau_status_24m
    if status is None:
        return RuleOutcome(0, "No clear bureau information for the last 24 months (neutral).")
    if status >= 3:
        return RuleOutcome(-30, "Bureau situation 3 or worse recorded in the last 24 months.")
    if status >= 2:
        return RuleOutcome(5, "Bureau situation 2 recorded and since regularized.")
    if status < 1:
        return RuleOutcome(15, f"Bureau situation {status} reported, no adverse record in the last 24 months.")
    return RuleOutcome(15, "Bureau situation 1 (normal) throughout the last 24 months.")


def formal_activity_rule(metrics: InternalMetrics) -> RuleOutcome:
    """
    Registered formal activity and its tenure.

    - no formal activity: -30
    - tenure >= 36 months: +15
    - tenure 12-35 months: +5
    - tenure < 12 months:  0
    """
    if not metrics.has_formal_activity:
        return RuleOutcome(-30, "No registered formal activity detected.")

    months = metrics.formal_activity_months
    if months >= 36:
        return RuleOutcome(15, "Formal activity with tenure of 36 months or more.")
    if months >= 12:
        return RuleOutcome(5, "Formal activity with tenure between 12 and 36 months.")
    return RuleOutcome(0, "Formal activity with tenure under 12 months.")


def capacity_usage_rule(metrics: InternalMetrics) -> RuleOutcome:
    """
    Share of total credit capacity committed as monthly debt.

    Upper bounds are inclusive: 30% → +15, 50% → +5, 80% → -10, above → -20.
    Debt with no known capacity → -25. No debt and no capacity → 0.
    """
    usage = capacity_usage(metrics)
    if usage is not None:
        if usage <= 0.30:
            return RuleOutcome(15, f"Low credit capacity usage ({_percent(usage)}).")
        if usage <= 0.50:
            return RuleOutcome(5, f"Moderate credit capacity usage ({_percent(usage)}).")
        if usage <= 0.80:
            return RuleOutcome(-10, f"High credit capacity usage ({_percent(usage)}).")
        return RuleOutcome(-20, f"Critical credit capacity usage ({_percent(usage)}).")

    if metrics.monthly_commitment > 0:
        return RuleOutcome(-25, "Monthly commitment with zero or unreported total credit capacity.")
    return RuleOutcome(0, "No registered debt and no reported credit capacity (neutral).")


def debt_to_income_rule(metrics: InternalMetrics) -> RuleOutcome:
    """
    Monthly commitment as a share of estimated monthly income (DTI).

    Upper bounds are inclusive: 30% → +15, 40% → +5, 50% → -10, above → -20.
    No income estimate → 0.
    """
    dti = debt_to_income(metrics)
    if dti is None:
        return RuleOutcome(0, "No estimated income information (neutral).")
    if dti <= 0.30:
        return RuleOutcome(15, f"Comfortable debt-to-income ratio ({_percent(dti)} of income).")
    if dti <= 0.40:
        return RuleOutcome(5, f"Moderate debt-to-income ratio ({_percent(dti)} of income).")
    if dti <= 0.50:
        return RuleOutcome(-10, f"Elevated debt-to-income ratio ({_percent(dti)} of income).")
    return RuleOutcome(-20, f"Critical debt-to-income ratio ({_percent(dti)} of income).")


def registrable_assets_rule(metrics: InternalMetrics) -> RuleOutcome:
    """Registered vehicles +5, registered real estate +10, independently."""
    vehicles = metrics.has_registered_vehicles
    real_estate = metrics.has_registered_real_estate

    if vehicles and real_estate:
        return RuleOutcome(15, "Owns registered vehicles and registered real estate.")
    if vehicles:
        return RuleOutcome(5, "Owns registered vehicles.")
    if real_estate:
        return RuleOutcome(10, "Owns registered real estate.")
    return RuleOutcome(0, "No registered vehicles or real estate detected (neutral).")


DEFAULT_RULES: Tuple[Rule, ...] = (
    bureau_history_rule,
    formal_activity_rule,
    capacity_usage_rule,
    debt_to_income_rule,
    registrable_assets_rule,
)
