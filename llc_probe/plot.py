import argparse
import logging
import sys
import time
from pathlib import Path

import matplotlib
import numpy as np

from . import caches as hw
from .bench import stride_sweep
from .estimate import COARSE_ITERATIONS, FINE_ITERATIONS, ProbeConfig, estimate_llc_size
from .memory_simulator import typical
from .plotting_utils import plot_cache_lines, plot_series
from .results import summary_table, write_results
from .sizes import LINEAR_STEPS
from .units import format_bytes

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s | %(levelname)-8s | %(message)s", datefmt="%H:%M:%S"))
    root = logging.getLogger("llc_probe")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Estimate the last level cache size from random access latency.")
    parser.add_argument("--store_dir", default="plots", type=str, help="Directory to store the plots and results")
    parser.add_argument("--out_format", default="png", type=str, help="Output format of the plots")
    parser.add_argument("--coarse_iterations", default=COARSE_ITERATIONS, type=int)
    parser.add_argument("--fine_iterations", default=FINE_ITERATIONS, type=int)
    parser.add_argument("--linear_steps", default=LINEAR_STEPS, type=int)
    parser.add_argument("--seed", default=None, type=int, help="Random seed; defaults to the current time")
    parser.add_argument("--simulate", default=None, type=positive_int, metavar="BYTES", help="Use a synthetic memory with this LLC size")
    parser.add_argument("--cache_lines", action="store_true", help="Run the stride experiment instead")
    parser.add_argument("--no_plots", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def print_cpu_info():
    print("CPU:", hw.cpu_model())
    line = hw.cache_line_size()
    if line is not None:
        print("Cache Line Size:", line, "bytes")
    for size, name in hw.caches():
        if name in ("L2", "L3"):
            print(f"{name} Cache:", format_bytes(size))


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    # Plots are only written to files.
    matplotlib.use("Agg")

    store_dir = Path(args.store_dir)
    store_dir.mkdir(parents=True, exist_ok=True)
    print_cpu_info()

    if args.cache_lines:
        series = stride_sweep()
        if not args.no_plots:
            plot_cache_lines(series, store_dir / f"caches.{args.out_format}")
        return 0

    seed = args.seed if args.seed is not None else time.time_ns()
    logger.debug("Seed: %d", seed)
    rng = np.random.default_rng(seed)

    config = ProbeConfig(
        linear_steps=args.linear_steps,
        coarse_iterations=args.coarse_iterations,
        fine_iterations=args.fine_iterations,
    )
    benchmark = typical(args.simulate) if args.simulate is not None else None
    cache_sizes = hw.caches()

    def on_phase(name, series):
        if args.no_plots:
            return
        plot_series(
            series,
            [s.size for s in series],
            store_dir / f"{name}.{args.out_format}",
            cache_sizes=cache_sizes,
        )

    estimate = estimate_llc_size(rng, config, benchmark=benchmark, on_phase=on_phase)

    print("Estimated LLC size:", format_bytes(estimate.size))
    data = write_results(estimate, store_dir / "results.json")
    print(summary_table(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
