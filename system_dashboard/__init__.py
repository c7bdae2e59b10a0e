"""System metrics dashboard service."""
from importlib.metadata import version

from .api import create_app
from .instrumentation import GaugeSet, InstrumentationError, ObservableRegistry
from .metrics import Metrics, Sampler

__all__ = [
    "create_app",
    "GaugeSet",
    "InstrumentationError",
    "Metrics",
    "ObservableRegistry",
    "Sampler",
    "__version__",
]

try:
    __version__ = version("system-metrics-dashboard")
except Exception:  # pragma: no cover - fallback when package metadata missing
    __version__ = "0.1.0"
