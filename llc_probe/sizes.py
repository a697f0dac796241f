from .units import KiB, MiB

FLOOR = 1 * KiB
CEILING = 64 * MiB
LINEAR_STEPS = 8


def geometric_sizes(floor: int = FLOOR, ceiling: int = CEILING) -> list[int]:
    # Log scale: the target's order of magnitude is unknown.
    if floor < 1:
        raise ValueError(f"floor must be positive, got {floor}")
    sizes = [floor]
    while sizes[-1] < ceiling:
        sizes.append(sizes[-1] * 2)
    return sizes


def linear_sizes(lower: int, upper: int, steps: int = LINEAR_STEPS) -> list[int]:
    if steps < 1:
        raise ValueError(f"steps must be positive, got {steps}")
    if upper <= lower:
        raise ValueError(f"empty interval [{lower}, {upper}]")
    step = (upper - lower) // steps
    if step == 0:
        raise ValueError(f"interval [{lower}, {upper}] too narrow for {steps} steps")
    return [lower + i * step for i in range(steps)]
