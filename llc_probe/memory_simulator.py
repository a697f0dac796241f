from .units import KiB, MiB


class SimulatedMemory:
    """Deterministic stand-in for the random access benchmark.

    Each level is (capacity in bytes, latency in ns). A working set gets the
    latency of the smallest level that holds it, or the RAM latency.
    """

    def __init__(self, levels, ram_latency: float, noise: float = 0.0):
        self.levels = sorted(levels)
        self.ram_latency = ram_latency
        self.noise = noise
        self.requests = []

    def latency_for(self, size: int) -> float:
        for capacity, latency in self.levels:
            if size <= capacity:
                return latency
        return self.ram_latency

    def __call__(self, size: int, iterations: int, rng) -> int:
        self.requests.append((size, iterations))
        latency = self.latency_for(size)
        if self.noise:
            latency *= 1 + self.noise * rng.uniform(-1, 1)
        return int(latency * iterations)


def typical(llc_size: int) -> SimulatedMemory:
    # L1 and L2 below the LLC, then RAM.
    levels = [(c, lat) for c, lat in [(32 * KiB, 1.0), (1 * MiB, 4.0)] if c < llc_size]
    levels.append((llc_size, 12.0))
    return SimulatedMemory(levels, ram_latency=80.0)
