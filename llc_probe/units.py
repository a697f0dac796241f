KiB = 2**10
MiB = 2**20

UNIT = 1024
PREFIXES = "KMGTPE"


def format_bytes(b: int) -> str:
    if b < UNIT:
        return f"{b} B"
    div, exp = UNIT, 0
    n = b // UNIT
    while n >= UNIT and exp < len(PREFIXES) - 1:
        div *= UNIT
        exp += 1
        n //= UNIT
    # Tenths by integer arithmetic, rounding half to even, so counts past the
    # float range still format.
    tenths, rem = divmod(b * 10, div)
    if 2 * rem > div or (2 * rem == div and tenths % 2):
        tenths += 1
    return f"{tenths // 10}.{tenths % 10} {PREFIXES[exp]}iB"


def _trim(value: float, decimals: int) -> str:
    s = f"{value:.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def format_duration(ns: float) -> str:
    """Render nanoseconds like Go's time.Duration: 850ns, 1.5µs, 2.25ms, 1.2s."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1e3:
        return f"{sign}{_trim(ns, 1)}ns"
    if ns < 1e6:
        return f"{sign}{_trim(ns / 1e3, 3)}µs"
    if ns < 1e9:
        return f"{sign}{_trim(ns / 1e6, 3)}ms"
    return f"{sign}{_trim(ns / 1e9, 3)}s"
