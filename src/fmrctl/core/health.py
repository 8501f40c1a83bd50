# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Readiness polling.

This module provides:
- wait_for_registry(): Block until the registry answers its readiness probe
- check_deadline(): Shared timeout/cancellation check for fixed-interval loops

Polling is fixed-interval with no backoff. Without a timeout the loops wait
forever and can only be interrupted by terminating the process.
"""

import logging
import threading
import time

from fmrctl.core.client import RegistryClient
from fmrctl.logging_utils import end_progress, progress_dot

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0


class WaitTimeoutError(TimeoutError):
    """A polling loop exceeded its configured timeout."""


class WaitAbortedError(RuntimeError):
    """A polling loop was cancelled through its stop event."""


def check_deadline(
    what: str,
    start_time: float,
    timeout: float | None,
    stop_event: threading.Event | None,
) -> None:
    """Raise if the loop was cancelled or ran past its timeout."""
    if stop_event is not None and stop_event.is_set():
        raise WaitAbortedError(f"Wait for {what} aborted by stop event")
    if timeout is not None and time.monotonic() - start_time >= timeout:
        raise WaitTimeoutError(f"{what} not ready after {timeout:.0f}s")


def wait_for_registry(
    client: RegistryClient,
    interval: float = DEFAULT_INTERVAL,
    timeout: float | None = None,
    stop_event: threading.Event | None = None,
    progress: bool = True,
) -> int:
    """Wait until the registry answers HEAD /ws/fusion/info/product.

    Args:
        client: Registry client
        interval: Seconds between probes
        timeout: Give up after this many seconds (default: never)
        stop_event: Optional threading.Event to abort waiting
        progress: Print a dot per failed probe

    Returns:
        Number of probes issued

    Raises:
        WaitTimeoutError: If timeout elapses first
        WaitAbortedError: If stop_event is set
    """
    start_time = time.monotonic()
    attempts = 0

    while True:
        check_deadline("registry", start_time, timeout, stop_event)
        attempts += 1
        if client.is_ready():
            if progress and attempts > 1:
                end_progress()
            logger.info("Registry is ready at %s", client.base_url)
            return attempts

        logger.debug("Registry not ready (attempt %d)", attempts)
        if progress:
            progress_dot()
        time.sleep(interval)
