import logging

import pandas as pd
import tabulate

from .units import format_bytes, format_duration

logger = logging.getLogger(__name__)

COLUMNS = ["phase", "size", "latency", "display_size"]


def series_frame(series, phase: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "phase": [phase] * len(series),
            "size": [s.size for s in series],
            "latency": [s.latency for s in series],
            "display_size": [format_bytes(s.size) for s in series],
        },
        columns=COLUMNS,
    )


def estimate_frame(estimate) -> pd.DataFrame:
    return pd.concat(
        [series_frame(estimate.coarse, "first"), series_frame(estimate.fine, "second")],
        ignore_index=True,
    )


def write_results(estimate, path):
    data = estimate_frame(estimate)
    try:
        data.to_json(path, orient="records", indent=2)
    except OSError as e:
        # The estimate has already been reported; losing the file is not fatal.
        logger.warning("Could not write %s: %s", path, e)
    else:
        logger.info("Saved %s", path)
    return data


def read_results(filename) -> pd.DataFrame:
    data = pd.read_json(filename, orient="records")
    return data.reindex(columns=COLUMNS)


def summary_table(data: pd.DataFrame) -> str:
    rows = [
        (row.phase, row.display_size, format_duration(row.latency))
        for row in data.itertuples(index=False)
    ]
    return tabulate.tabulate(rows, headers=["phase", "size", "latency"], tablefmt="orgtbl")
