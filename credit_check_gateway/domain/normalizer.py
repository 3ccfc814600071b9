"""Report normalization - maps an external credit report onto internal metrics"""

import math
from typing import Any, Dict, Iterable, Optional

from credit_check_gateway.domain.models import InternalMetrics, RiskTier

NO_NAME = "no name"

# Flags under scoringInforme.actividad that mark a registered formal activity
FORMAL_ACTIVITY_FLAGS = ("empleado", "autonomo", "monotributista", "empleador")

# Provider scoring scale: 1-2 high risk, 3-4 medium, 5 low
HIGH_RISK_MAX_SCORING = 2
MEDIUM_RISK_MAX_SCORING = 4


NON_FINITE_LITERALS = ("inf", "infinity", "nan")


def _as_number(value: Any, keep_overflow: bool = False) -> Optional[float]:
    """
    Coerce a report leaf to a finite float, or None when it is not one.

    A numeric literal too large for a float is finite data, not garbage: with
    keep_overflow it becomes a signed infinity so it still compares as huge,
    otherwise it is unusable like any other non-finite value. Explicit
    inf/nan values are never accepted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, float):
        return value if math.isfinite(value) else None
    elif isinstance(value, str):
        text = value.strip()
        if text.lower().lstrip("+-") in NON_FINITE_LITERALS:
            return None
        try:
            number = float(text)  # "1e400" parses to inf
        except ValueError:
            return None
    else:
        return None

    if math.isfinite(number) or (keep_overflow and not math.isnan(number)):
        return number
    return None


def _positive(value: Any) -> float:
    """Finite positive amount, or 0.0."""
    number = _as_number(value)
    return number if number is not None and number > 0 else 0.0


def _section(container: Any, key: str) -> Dict[str, Any]:
    """Nested object under key, or an empty dict when absent or mistyped."""
    if not isinstance(container, dict):
        return {}
    value = container.get(key)
    return value if isinstance(value, dict) else {}


def _has_items(container: Any, key: str) -> bool:
    if not isinstance(container, dict):
        return False
    value = container.get(key)
    return isinstance(value, list) and len(value) > 0


def _first_name(candidates: Iterable[Any]) -> str:
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return NO_NAME


def derive_coarse_tier(report: Any) -> RiskTier:
    """
    Map the provider scoring value to a coarse risk tier.

    - scoring <= 2     → HIGH
    - 3 <= scoring <= 4 → MEDIUM
    - scoring >= 5     → LOW (including numbers too large for a float)
    - missing / non-numeric → MEDIUM, forcing the internal evaluation
    """
    scoring = _as_number(_section(report, "scoringInforme").get("scoring"), keep_overflow=True)
    if scoring is None:
        return RiskTier.MEDIUM
    if scoring <= HIGH_RISK_MAX_SCORING:
        return RiskTier.HIGH
    if scoring <= MEDIUM_RISK_MAX_SCORING:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def worst_bureau_status(report: Any) -> Optional[int]:
    """
    Worst (highest) bureau situation code across the 24-month history.

    The history is keyed by period, but a plain list of entries is accepted too.
    Returns None when there is no usable entry, so that missing data is never
    confused with a clean record.
    """
    bcra = _section(report, "bcra")
    history = bcra.get("resumen_historico")
    if isinstance(history, dict):
        entries = history.values()
    elif isinstance(history, list):
        entries = history
    else:
        return None

    worst: Optional[float] = None
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        situation = _as_number(entry.get("peor_situacion"))
        if situation is not None and (worst is None or situation > worst):
            worst = situation

    return int(worst) if worst is not None else None


def _months(years: float) -> int:
    """Whole months in a tenure given in years; exact integer math once floats overflow."""
    months = years * 12
    if math.isfinite(months):
        return int(months)
    return int(years) * 12


def _has_formal_activity(activity: Dict[str, Any]) -> bool:
    return any(
        isinstance(activity.get(flag), str) and activity[flag].strip().upper() == "SI"
        for flag in FORMAL_ACTIVITY_FLAGS
    )


def normalize(report: Any) -> InternalMetrics:
    """
    Extract the internal metric set from an external report.

    Never fails: every absent, mistyped or non-finite field falls back to a
    neutral default (0, False, None or "no name").
    """
    identity = _section(report, "identidad")
    tax_status = _section(report, "condicionTributaria")
    scoring = _section(report, "scoringInforme")

    full_name = _first_name(
        [
            identity.get("nombre_completo"),
            _section(report, "soaAfipA4Online").get("nombreCompleto"),
            tax_status.get("nombre"),
        ]
    )

    # Annual debt spread over 12 months as a monthly commitment estimate
    monthly_commitment = _positive(scoring.get("deuda")) / 12
    monthly_income = _positive(tax_status.get("monto_anual")) / 12
    activity_months = _months(_positive(identity.get("anios_inscripcion")))

    return InternalMetrics(
        full_name=full_name,
        coarse_tier=derive_coarse_tier(report),
        total_capacity=_positive(scoring.get("credito")),
        monthly_commitment=monthly_commitment,
        monthly_income_estimate=monthly_income,
        formal_activity_months=activity_months,
        worst_bureau_status_24m=worst_bureau_status(report),
        has_formal_activity=_has_formal_activity(_section(scoring, "actividad")),
        has_registered_vehicles=_has_items(report, "rodados"),
        has_registered_real_estate=_has_items(report, "inmuebles"),
    )
