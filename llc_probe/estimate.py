"""Two-phase LLC size estimate.

A coarse sweep over doubling sizes finds the pair of sizes between which the
average access latency rises the most. A fine sweep then walks that interval
in equal linear steps and the knee of the second curve is the estimate.
"""
import logging
from dataclasses import dataclass, field
from functools import partial

import numpy as np

from .bench import ELEMENT_SIZE, Sample, random_access, run_sweep
from .knee import max_slope
from .sizes import CEILING, FLOOR, LINEAR_STEPS, geometric_sizes, linear_sizes
from .units import format_bytes

logger = logging.getLogger(__name__)

COARSE_ITERATIONS = 2**24
FINE_ITERATIONS = 2**25


@dataclass(frozen=True)
class ProbeConfig:
    floor: int = FLOOR
    ceiling: int = CEILING
    linear_steps: int = LINEAR_STEPS
    coarse_iterations: int = COARSE_ITERATIONS
    fine_iterations: int = FINE_ITERATIONS
    element_size: int = ELEMENT_SIZE


@dataclass(frozen=True)
class Estimate:
    size: int
    coarse: list[Sample] = field(default_factory=list)
    fine: list[Sample] = field(default_factory=list)
    coarse_knee: int = 0
    fine_knee: int = 0


def bracket(series: list[Sample], knee: int) -> tuple[int, int]:
    if not 0 <= knee < len(series) - 1:
        raise ValueError(f"knee {knee} has no upper neighbour in a series of {len(series)}")
    return series[knee].size, series[knee + 1].size


def estimate_llc_size(rng: np.random.Generator, config: ProbeConfig = ProbeConfig(), benchmark=None, on_phase=None) -> Estimate:
    """Run both sweeps and return the estimate.

    `benchmark` is called as benchmark(size, iterations, rng) and returns the
    elapsed nanoseconds; it defaults to the random access benchmark.
    `on_phase(name, series)` is called after each sweep with "first" and
    "second" and is used only for output.

    The estimate is the fine size at the knee index, i.e. the largest size
    still believed to fit in cache, not the first size past the jump.
    """
    if benchmark is None:
        benchmark = partial(random_access, element_size=config.element_size)

    sizes = geometric_sizes(config.floor, config.ceiling)
    coarse = run_sweep(sizes, config.coarse_iterations, rng, benchmark)
    if on_phase is not None:
        on_phase("first", coarse)

    coarse_knee = max_slope(coarse)
    lower, upper = bracket(coarse, coarse_knee)
    logger.debug("Coarse knee at %d: %s .. %s", coarse_knee, format_bytes(lower), format_bytes(upper))

    sizes = linear_sizes(lower, upper, config.linear_steps)
    fine = run_sweep(sizes, config.fine_iterations, rng, benchmark)
    if on_phase is not None:
        on_phase("second", fine)

    fine_knee = max_slope(fine)
    logger.debug("Fine knee at %d: %s", fine_knee, format_bytes(sizes[fine_knee]))

    return Estimate(
        size=sizes[fine_knee],
        coarse=coarse,
        fine=fine,
        coarse_knee=coarse_knee,
        fine_knee=fine_knee,
    )
