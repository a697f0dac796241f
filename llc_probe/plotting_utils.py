import logging

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.ticker import FixedLocator, FuncFormatter, NullLocator

from .units import format_bytes, format_duration

logger = logging.getLogger(__name__)


def _save(fig, out):
    try:
        fig.savefig(out, bbox_inches="tight", dpi=150)
    except OSError as e:
        # Plots are only for looking at; the estimate does not need them.
        logger.warning("Could not save %s: %s", out, e)
        return False
    finally:
        plt.close(fig)
    logger.info("Saved %s", out)
    return True


def plot_series(series, sizes, out, title="Average access time for different sized arrays", cache_sizes=()):
    plt.close("all")
    fig, ax = plt.subplots(figsize=(12, 8))
    sns.lineplot(
        x=[s.size for s in series],
        y=[s.latency for s in series],
        marker="o",
        ax=ax,
    )

    ax.set_title(title)
    ax.set_xlabel("Array size")
    ax.set_ylabel("Average time")
    ax.set_xscale("log", base=2)
    # One tick per tested size.
    ax.xaxis.set_major_locator(FixedLocator(sizes))
    ax.xaxis.set_minor_locator(NullLocator())
    ax.xaxis.set_major_formatter(FuncFormatter(lambda x, _: format_bytes(int(x))))
    ax.yaxis.set_major_formatter(FuncFormatter(lambda y, _: format_duration(y)))
    ax.set_ylim(bottom=0)
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")

    lo, hi = min(sizes), max(sizes)
    for size, name in cache_sizes:
        if lo <= size <= hi:
            ax.axvline(x=size, linestyle="--", color="red", zorder=0)
            ax.text(size, 0, f"{name} ", color="red", va="bottom", ha="right")
    ax.grid(True, alpha=0.4)
    return _save(fig, out)


def plot_cache_lines(series, out):
    plt.close("all")
    fig, ax = plt.subplots(figsize=(8, 8))
    sns.lineplot(x=[s.size for s in series], y=[s.latency for s in series], ax=ax)
    ax.set_title("Cache lines measurement")
    ax.set_xlabel("Difference (K)")
    ax.set_ylabel("Time")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda y, _: format_duration(y)))
    ax.grid(True, alpha=0.4)
    return _save(fig, out)
