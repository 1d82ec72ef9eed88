"""
Server Entry Point - Main Layer

Runs the embedded container as a standalone process until it receives
SIGINT or SIGTERM.
"""

import signal
import threading
from typing import Any, Optional

from webcontainer.main.config import get_settings
from webcontainer.main.container import container_lifespan, init_container
from webcontainer.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

logger = get_logger(__name__)


def _install_signal_handlers(stop_event: threading.Event) -> None:
    def _handle(signum: int, frame: Any) -> None:
        logger.info("server.signal", signal=signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def run(stop_event: Optional[threading.Event] = None) -> None:
    """Start the container and block until ``stop_event`` is set."""
    settings = get_settings()
    update_logging_from_settings(settings)

    init_container(settings)

    if stop_event is None:
        stop_event = threading.Event()
        _install_signal_handlers(stop_event)

    with container_lifespan() as container:
        embedded = container.embedded()
        for connector in embedded.connectors:
            logger.info(
                "server.listening",
                url=f"{connector.scheme}://{connector.address}:{connector.bound_port}",
            )
        stop_event.wait()

    logger.info("server.exited")


def main() -> None:
    """Main entry point for the standalone container."""

    configure_logging()
    logger.info("Starting web container")
    run()


if __name__ == "__main__":
    main()
