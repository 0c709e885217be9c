"""Bounded wait-for-condition helper."""

import logging
import math
import threading
import time
from collections.abc import Callable
from typing import TypeVar

from sriov_net_config.errors import OperationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def poll_until(
    probe: Callable[[], T | None],
    timeout: float,
    interval: float = 1.0,
    cancel: threading.Event | None = None,
) -> T | None:
    """Call ``probe`` until it returns something other than None.

    The probe is called up to ``ceil(timeout / interval)`` times (at least
    once), with ``interval`` seconds between attempts.

    Args:
        probe: Callable returning a result, or None if not ready yet
        timeout: Total time to wait in seconds
        interval: Delay between attempts in seconds
        cancel: Optional event; when set, the wait is abandoned

    Returns:
        The first non-None probe result, or None if the timeout expired

    Raises:
        OperationCancelledError: If ``cancel`` is set while waiting
    """
    if interval <= 0:
        raise ValueError("Polling interval must be positive")

    attempts = max(1, math.ceil(timeout / interval))

    for attempt in range(1, attempts + 1):
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError("Wait cancelled by shutdown request")

        result = probe()
        if result is not None:
            if attempt > 1:
                logger.debug("Condition met on attempt %d/%d", attempt, attempts)
            return result

        logger.debug(
            "Condition not met (attempt %d/%d), retrying in %.1fs", attempt, attempts, interval
        )
        if cancel is not None:
            if cancel.wait(interval):
                raise OperationCancelledError("Wait cancelled by shutdown request")
        else:
            time.sleep(interval)

    return None
