from .estimate import Estimate, ProbeConfig, estimate_llc_size
from .units import format_bytes

__all__ = ["Estimate", "ProbeConfig", "estimate_llc_size", "format_bytes"]
