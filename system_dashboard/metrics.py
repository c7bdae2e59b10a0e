"""Helpers for sampling host resource utilization."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, TypeVar

import psutil

logger = logging.getLogger(__name__)

MEGABYTE = 1024 * 1024
GIGABYTE = 1024 * 1024 * 1024
DEFAULT_CPU_INTERVAL_SECONDS = 1.0

T = TypeVar("T")


@dataclass(frozen=True)
class Metrics:
    """Point-in-time snapshot of host CPU, memory, and disk usage."""

    cpu_usage_percent: float = 0.0
    memory_used_mb: int = 0
    memory_total_mb: int = 0
    disk_used_gb: int = 0
    disk_total_gb: int = 0
    unavailable: FrozenSet[str] = field(default_factory=frozenset)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["unavailable"] = sorted(self.unavailable)
        return data


class HostStats:
    """OS statistics backed by psutil. Byte counts are returned as (used, total)."""

    def cpu_percent(self, interval: float) -> float:
        return psutil.cpu_percent(interval=interval)

    def virtual_memory(self) -> Tuple[int, int]:
        memory = psutil.virtual_memory()
        return memory.used, memory.total

    def disk_usage(self, path: str) -> Tuple[int, int]:
        usage = psutil.disk_usage(path)
        return usage.used, usage.total


def _usage(used: int, total: int, unit: int) -> Tuple[int, int]:
    total = max(0, int(total)) // unit
    used = max(0, int(used)) // unit
    return min(used, total), total


class Sampler:
    """Take fresh, uncached snapshots from an OS statistics collaborator.

    Each query is best-effort: a failing query zeroes its fields and marks the
    group as unavailable instead of failing the whole snapshot. The CPU query
    blocks for ``cpu_interval`` seconds.
    """

    def __init__(
        self,
        stats: Optional[HostStats] = None,
        disk_path: str = "/",
        cpu_interval: float = DEFAULT_CPU_INTERVAL_SECONDS,
    ) -> None:
        self.stats = stats if stats is not None else HostStats()
        self.disk_path = disk_path
        self.cpu_interval = cpu_interval

    def _query(self, group: str, query: Callable[[], T], unavailable: set) -> Optional[T]:
        try:
            return query()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Failed to read %s statistics: %s", group, exc)
            unavailable.add(group)
            return None

    def sample(self) -> Metrics:
        unavailable: set = set()

        cpu = self._query("cpu", lambda: self.stats.cpu_percent(self.cpu_interval), unavailable)
        memory = self._query("memory", self.stats.virtual_memory, unavailable)
        disk = self._query("disk", lambda: self.stats.disk_usage(self.disk_path), unavailable)

        memory_used, memory_total = _usage(*memory, MEGABYTE) if memory else (0, 0)
        disk_used, disk_total = _usage(*disk, GIGABYTE) if disk else (0, 0)

        return Metrics(
            cpu_usage_percent=min(100.0, max(0.0, float(cpu))) if cpu is not None else 0.0,
            memory_used_mb=memory_used,
            memory_total_mb=memory_total,
            disk_used_gb=disk_used,
            disk_total_gb=disk_total,
            unavailable=frozenset(unavailable),
        )
