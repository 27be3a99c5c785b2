"""Bounded random drift applied to stored values to simulate live data.

All functions take the random source explicitly so callers (and tests) can
supply a seeded ``random.Random``.
"""

import random
from dataclasses import dataclass

from devpulse.core.models import MetricSample

CPU_BOUNDS = (20.0, 90.0)
MEMORY_BOUNDS = (30.0, 95.0)
UPTIME_BOUNDS = (0.0, 100.0)

CPU_STEP = 5.0
MEMORY_STEP = 4.0
UPTIME_STEP = 0.05

# Inclusive integer ranges
REQUESTS_STEP = (10, 59)
ERRORS_STEP = (-1, 1)

DEFAULT_METRICS = MetricSample(cpu=45, memory=62, requests=1240, errors=8)


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the closed interval [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class MetricStep:
    """Random increments taking one metric sample to the next.

    Attributes:
        cpu: Added to cpu before clamping to CPU_BOUNDS.
        memory: Added to memory before clamping to MEMORY_BOUNDS.
        requests: Added to requests, always within REQUESTS_STEP.
        errors: Added to errors before flooring at zero.
    """

    cpu: float
    memory: float
    requests: int
    errors: int


def draw_metric_step(rng: random.Random) -> MetricStep:
    """Draw the increments for one drift step."""
    return MetricStep(
        cpu=rng.uniform(-CPU_STEP, CPU_STEP),
        memory=rng.uniform(-MEMORY_STEP, MEMORY_STEP),
        requests=rng.randint(*REQUESTS_STEP),
        errors=rng.randint(*ERRORS_STEP),
    )


def apply_metric_step(prev: MetricSample, step: MetricStep) -> MetricSample:
    """Apply step to prev, clamping cpu and memory and flooring errors at 0."""
    return MetricSample(
        cpu=clamp(prev.cpu + step.cpu, *CPU_BOUNDS),
        memory=clamp(prev.memory + step.memory, *MEMORY_BOUNDS),
        requests=prev.requests + step.requests,
        errors=max(0, prev.errors + step.errors),
    )


def next_metrics(prev: MetricSample, rng: random.Random) -> MetricSample:
    """Derive the next metric sample from the previous one.

    cpu and memory take a uniform step and are clamped to their bounds,
    requests grows by 10-59 and errors moves by -1, 0 or +1 without going
    below zero. The returned sample has no id or timestamp; persisting it
    is up to the caller.

    Args:
        prev: Last stored sample. Not modified.
        rng: Random source.

    Returns:
        New MetricSample.
    """
    return apply_metric_step(prev, draw_metric_step(rng))


def next_uptime(prev: float, rng: random.Random) -> float:
    """Return a drifted uptime percentage rounded to one decimal place."""
    drifted = clamp(prev + rng.uniform(-UPTIME_STEP, UPTIME_STEP), *UPTIME_BOUNDS)
    return round(drifted, 1)
