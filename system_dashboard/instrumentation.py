"""Observable gauges that report host metrics to a Prometheus registry on demand.

Gauges are pull-based: nothing here runs a timer. The registry invokes the
observation callback whenever it is collected (for example on a scrape of the
``/metrics`` endpoint), and every invocation reports all gauges from a single
:class:`~system_dashboard.metrics.Metrics` snapshot.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily

from .metrics import Sampler

logger = logging.getLogger(__name__)


class InstrumentationError(RuntimeError):
    """Raised when gauges cannot be created or the callback cannot be registered."""


@dataclass(frozen=True)
class GaugeHandle:
    name: str
    description: str
    unit: str

    @property
    def metric_name(self) -> str:
        return self.name.replace(".", "_")


@dataclass(frozen=True)
class GaugeSet:
    cpu: GaugeHandle
    memory: GaugeHandle
    disk: GaugeHandle

    def __iter__(self) -> Iterator[GaugeHandle]:
        return iter((self.cpu, self.memory, self.disk))


GAUGE_DEFINITIONS = {
    "cpu": ("cpu.usage", "Host CPU utilization over the sampling window", "percent"),
    "memory": ("memory.used", "Host memory in use", "megabytes"),
    "disk": ("disk.used", "Disk space in use on the monitored mount", "gigabytes"),
}


def _gauge_family(handle: GaugeHandle) -> GaugeMetricFamily:
    return GaugeMetricFamily(handle.metric_name, handle.description, unit=handle.unit)


class Observer:
    """Collects one batch of gauge observations."""

    def __init__(self, gauges: GaugeSet) -> None:
        self._families: Dict[GaugeHandle, GaugeMetricFamily] = {
            handle: _gauge_family(handle) for handle in gauges
        }

    def record(self, handle: GaugeHandle, value: float) -> None:
        family = self._families.get(handle)
        if family is None:
            raise KeyError(f"Unknown gauge: {handle.name}")
        family.add_metric([], float(value))

    def families(self) -> List[GaugeMetricFamily]:
        return list(self._families.values())


ObservationCallback = Callable[[Observer], None]


class _CallbackCollector:
    """Adapts an observation callback to the prometheus_client collector protocol."""

    def __init__(
        self,
        gauges: GaugeSet,
        callback: ObservationCallback,
        descriptions: List[GaugeMetricFamily],
    ) -> None:
        self.gauges = gauges
        self.callback = callback
        self.descriptions = descriptions

    def describe(self) -> List[GaugeMetricFamily]:
        return list(self.descriptions)

    def collect(self) -> List[GaugeMetricFamily]:
        observer = Observer(self.gauges)
        self.callback(observer)
        return observer.families()


class ObservableRegistry:
    """Owns the host gauges and the callback that feeds them.

    The underlying :class:`CollectorRegistry` is created per instance rather
    than taken from ``prometheus_client.REGISTRY``.
    """

    def __init__(self, sampler: Sampler, registry: Optional[CollectorRegistry] = None) -> None:
        self.sampler = sampler
        self._registry = registry if registry is not None else CollectorRegistry()
        self._gauges: Optional[GaugeSet] = None
        self._descriptions: List[GaugeMetricFamily] = []
        self._collector: Optional[_CallbackCollector] = None

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def initialize(self) -> GaugeSet:
        """Create the ``cpu.usage``, ``memory.used`` and ``disk.used`` gauges."""
        try:
            handles = {
                key: GaugeHandle(name=name, description=description, unit=unit)
                for key, (name, description, unit) in GAUGE_DEFINITIONS.items()
            }
            descriptions = [_gauge_family(handle) for handle in handles.values()]
        except (TypeError, ValueError) as exc:
            raise InstrumentationError(f"Failed to create gauges: {exc}") from exc

        self._gauges = GaugeSet(**handles)
        self._descriptions = descriptions
        logger.debug("Created gauges: %s", ", ".join(h.name for h in self._gauges))
        return self._gauges

    def _observe(self, gauges: GaugeSet) -> ObservationCallback:
        def callback(observer: Observer) -> None:
            snapshot = self.sampler.sample()
            observer.record(gauges.cpu, snapshot.cpu_usage_percent)
            observer.record(gauges.memory, snapshot.memory_used_mb)
            observer.record(gauges.disk, snapshot.disk_used_gb)

        return callback

    def register_observation_callback(self, gauges: GaugeSet) -> None:
        """Register the single callback that reports ``gauges`` from one snapshot."""
        if self._collector is not None:
            raise InstrumentationError("Observation callback is already registered")
        if gauges is None or gauges is not self._gauges:
            raise InstrumentationError("Gauge set was not created by this registry")

        collector = _CallbackCollector(gauges, self._observe(gauges), self._descriptions)
        try:
            self._registry.register(collector)
        except ValueError as exc:
            raise InstrumentationError(f"Failed to register callback: {exc}") from exc

        self._collector = collector
        logger.info("Registered observation callback for %d gauges", len(list(gauges)))
