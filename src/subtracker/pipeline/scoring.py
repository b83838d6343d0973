from __future__ import annotations

from typing import Dict

from subtracker.models import ConfidenceFactors, ScoreBreakdown

# Results below this are dropped without a trace.
MIN_CONFIDENCE = 0.5

CONFIDENCE_WEIGHTS: Dict[str, float] = {
    "has_trial_keywords": 0.3,
    "has_billing_keywords": 0.2,
    "has_service_name": 0.3,
    "has_trial_end_date": 0.15,
    "has_pricing": 0.05,
}


def raw_score(factors: ConfidenceFactors) -> float:
    return sum(
        weight for name, weight in CONFIDENCE_WEIGHTS.items() if getattr(factors, name)
    )


def calculate_confidence(factors: ConfidenceFactors) -> float:
    """Weighted sum of extraction signals, clamped to [0, 1]."""
    return max(0.0, min(raw_score(factors), 1.0))


def score_breakdown(factors: ConfidenceFactors) -> ScoreBreakdown:
    confidence = calculate_confidence(factors)
    return ScoreBreakdown(
        factors=factors,
        raw_score=raw_score(factors),
        confidence=confidence,
        accepted=confidence >= MIN_CONFIDENCE,
    )
