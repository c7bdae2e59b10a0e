"""CLI entrypoint for launching the dashboard with Uvicorn."""
from __future__ import annotations

import logging

import uvicorn

from .api import create_app
from .config import get_settings
from .instrumentation import InstrumentationError, ObservableRegistry
from .metrics import Sampler


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    sampler = Sampler(disk_path=settings.disk_path, cpu_interval=settings.cpu_interval)
    registry = ObservableRegistry(sampler)
    try:
        gauges = registry.initialize()
        registry.register_observation_callback(gauges)
    except InstrumentationError as exc:
        logging.critical("Instrumentation setup failed: %s", exc)
        raise SystemExit(1) from exc

    app = create_app(sampler, registry)
    logging.info("Server started at %s:%d (disk %s)", settings.host, settings.port, settings.disk_path)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
