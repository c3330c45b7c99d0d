"""Riesgo de enjambrazón a partir de las últimas lecturas."""

from __future__ import annotations

from collections.abc import Sequence

from hive_tool.model import SensorReading, SwarmRiskResult
from hive_tool.windowing import readings_to_frame, valid_values, weight_values

SWARM_WINDOW = 7

WEIGHT_DROP_KG = -2.0
BROOD_RANGE_C = 3.0
MEAN_STEP_KG = 0.5

WEIGHT_DROP_POINTS = 30
BROOD_VARIANCE_POINTS = 20
ACTIVITY_POINTS = 15


def risk_band(score: int) -> str:
    """Map an additive risk score to Low/Medium/High."""
    if score > 40:
        return "High"
    if score > 20:
        return "Medium"
    return "Low"


def swarm_risk(readings: Sequence[SensorReading]) -> SwarmRiskResult:
    """Score swarm risk over the last 7 readings in arrival order.

    Indicators: a weight drop of more than 2 kg across the window, a brood
    temperature range above 3 °C, and a mean sample-to-sample weight change
    above 0.5 kg.
    """
    if len(readings) < SWARM_WINDOW:
        return SwarmRiskResult(
            risk="Unknown",
            score=0,
            indicators=["Not enough data for accurate assessment."],
        )

    recent = readings_to_frame(list(readings)[-SWARM_WINDOW:], sort=False)
    weights = weight_values(recent["weight"])
    indicators: list[str] = []
    score = 0

    # NaN endpoints compare False and add nothing.
    weight_change = weights.iloc[-1] - weights.iloc[0]
    if weight_change < WEIGHT_DROP_KG:
        indicators.append("Significant recent weight loss detected.")
        score += WEIGHT_DROP_POINTS

    brood = valid_values(recent["brood_temperature"])
    if len(brood) > 1 and brood.max() - brood.min() > BROOD_RANGE_C:
        indicators.append("High brood temperature variance detected.")
        score += BROOD_VARIANCE_POINTS

    steps = weights.diff().abs().dropna()
    mean_step = float(steps.mean()) if not steps.empty else 0.0
    if mean_step > MEAN_STEP_KG:
        indicators.append(
            "Elevated daily weight fluctuations, indicating high activity."
        )
        score += ACTIVITY_POINTS

    if not indicators:
        indicators = ["No immediate swarm risk indicators detected."]
    return SwarmRiskResult(risk=risk_band(score), score=score, indicators=indicators)
