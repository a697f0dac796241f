import platform
from pathlib import Path

CACHE_DIR = Path("/sys/devices/system/cpu/cpu0/cache")
CPUINFO = Path("/proc/cpuinfo")

# Note: index1 is the L1 instruction cache.
LEVELS = [(0, "L1"), (2, "L2"), (3, "L3")]

SUFFIXES = {"K": 2**10, "M": 2**20, "G": 2**30}


def parse_cache_size(text: str) -> int:
    # sysfs strings look like 32K or 8192K.
    t = text.strip()
    if t and t[-1].upper() in SUFFIXES:
        return int(t[:-1]) * SUFFIXES[t[-1].upper()]
    return int(t)


def caches(cache_dir: Path = CACHE_DIR):
    sizes = []
    for i, name in LEVELS:
        try:
            t = (cache_dir / f"index{i}" / "size").read_text()
            sizes.append((parse_cache_size(t), name))
        except (OSError, ValueError):
            continue
    return sizes


def cache_line_size(cache_dir: Path = CACHE_DIR):
    try:
        return int((cache_dir / "index0" / "coherency_line_size").read_text())
    except (OSError, ValueError):
        return None


def cpu_model(cpuinfo: Path = CPUINFO) -> str:
    try:
        for line in cpuinfo.read_text().splitlines():
            if line.startswith("model name"):
                return line.split(":", 1)[1].strip()
    except OSError:
        pass
    return platform.processor() or "Unknown"
