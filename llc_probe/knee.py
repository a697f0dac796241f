def _latency(sample):
    return getattr(sample, "latency", sample)


def max_slope(series) -> int:
    """Index i of the largest positive latency step from series[i] to series[i+1].

    Only latencies are compared; the sizes are not taken into account. Ties
    keep the first step, and with no rise at all the result is 0.
    """
    if len(series) < 2:
        raise ValueError(f"need at least 2 samples, got {len(series)}")
    best = 0.0
    best_pos = 0
    for i in range(len(series) - 1):
        slope = _latency(series[i + 1]) - _latency(series[i])
        if slope > best:
            best = slope
            best_pos = i
    return best_pos
