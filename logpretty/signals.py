"""Keep the process alive through interrupts; only end-of-input stops it."""

import logging
import signal

logger = logging.getLogger(__name__)

SUPPRESSED_SIGNALS = ("SIGINT", "SIGTERM")


class SignalSetupError(Exception):
    """Raised when the interrupt handlers cannot be installed."""


def _ignore(signum, frame):
    logger.debug("Ignoring signal %d", signum)


def suppress_signals(names: tuple[str, ...] = SUPPRESSED_SIGNALS) -> list[int]:
    """Install a no-op handler for each named signal the platform has.

    Returns the signal numbers that were handled. Signals unknown to the
    platform are skipped.
    """
    handled = []
    for name in names:
        signum = getattr(signal, name, None)
        if signum is None:
            logger.debug("Signal %s not available on this platform", name)
            continue
        try:
            signal.signal(signum, _ignore)
        except (OSError, ValueError) as e:
            raise SignalSetupError(f"Cannot install handler for {name}: {e}") from e
        handled.append(signum)
    return handled
