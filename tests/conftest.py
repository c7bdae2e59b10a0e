"""Shared fixtures: a scripted OS statistics collaborator."""
import pytest

from system_dashboard.instrumentation import ObservableRegistry
from system_dashboard.metrics import GIGABYTE, MEGABYTE, Sampler


class FakeStats:
    """Returns canned readings; a reading set to an exception is raised instead."""

    def __init__(self, cpu=42.5, memory=(2048 * MEGABYTE, 8192 * MEGABYTE), disk=(100 * GIGABYTE, 500 * GIGABYTE)):
        self.cpu = cpu
        self.memory = memory
        self.disk = disk
        self.calls = []

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    def cpu_percent(self, interval):
        self.calls.append(("cpu", interval))
        return self._answer(self.cpu)

    def virtual_memory(self):
        self.calls.append(("memory",))
        return self._answer(self.memory)

    def disk_usage(self, path):
        self.calls.append(("disk", path))
        return self._answer(self.disk)


class CountingSampler(Sampler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sample_count = 0

    def sample(self):
        self.sample_count += 1
        return super().sample()


@pytest.fixture
def stats():
    return FakeStats()


@pytest.fixture
def sampler(stats):
    return CountingSampler(stats, disk_path="/", cpu_interval=0.0)


@pytest.fixture
def observable(sampler):
    registry = ObservableRegistry(sampler)
    registry.register_observation_callback(registry.initialize())
    return registry
