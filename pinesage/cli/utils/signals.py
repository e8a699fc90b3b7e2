"""Signal handling for graceful shutdown."""

import signal
import sys

_installed = False


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt(f"Received signal {signum}")


def setup_signal_handlers() -> None:
    """Treat SIGTERM like Ctrl+C so running servers unwind their transports."""
    global _installed
    if _installed:
        return
    if sys.platform != "win32":
        signal.signal(signal.SIGTERM, _raise_interrupt)
    signal.signal(signal.SIGINT, signal.default_int_handler)
    _installed = True
