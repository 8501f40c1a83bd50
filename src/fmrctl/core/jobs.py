# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Asynchronous registry jobs: submission and status polling.

A job is known only by the opaque token the registry returns. Its status lives
server-side and is polled until it enters the terminal set
{Complete, IncorrectDSD, InvalidRef, MissingDSD, Error}. Polling does not tell
success from failure; callers read the returned status and the load report.
"""

import logging
import threading
import time

from fmrctl.contract import TERMINAL_STATUSES, DataLoadPayload
from fmrctl.core.client import RegistryClient
from fmrctl.core.health import DEFAULT_INTERVAL, check_deadline
from fmrctl.core.schema import DataLoadConfig

logger = logging.getLogger(__name__)


class EmptyTokenError(ValueError):
    """The registry did not issue a job token."""


def is_terminal(status: str | None) -> bool:
    return status in TERMINAL_STATUSES


def require_token(uid: str | None) -> str:
    if not uid or not uid.strip():
        raise EmptyTokenError("Error with the request: no job token")
    return uid.strip()


def wait_for_job(
    client: RegistryClient,
    uid: str | None,
    interval: float = DEFAULT_INTERVAL,
    timeout: float | None = None,
    stop_event: threading.Event | None = None,
) -> str:
    """Poll loadStatus until the job reaches a terminal status.

    Without a timeout this blocks until the registry reports a terminal status,
    however long that takes.

    Args:
        client: Registry client
        uid: Job token
        interval: Seconds between polls
        timeout: Give up after this many seconds (default: never)
        stop_event: Optional threading.Event to abort waiting

    Returns:
        The terminal status

    Raises:
        EmptyTokenError: If uid is empty (no request is made)
        WaitTimeoutError: If timeout elapses first
        WaitAbortedError: If stop_event is set
    """
    uid = require_token(uid)
    start_time = time.monotonic()

    while True:
        check_deadline(f"job {uid}", start_time, timeout, stop_event)
        status = client.load_status(uid).get("Status")
        logger.info("%s: %s", uid, status)
        if is_terminal(status):
            return status
        time.sleep(interval)


def submit_load(client: RegistryClient, config: DataLoadConfig) -> str:
    """Submit a data load job described by config. Returns the token ("" on failure)."""
    payload = DataLoadPayload(
        data_upload_type=config.upload_type,
        upload_url=config.upload_url,
        data_file_name=config.data_file_name,
        data_format=config.data_format,
        dsd=config.dsd,
        csv_delimiter=config.csv_delimiter,
    )
    uid = client.load_data(payload)
    if uid:
        logger.info("Data load submitted: %s", uid)
    return uid


def submit_revalidation(client: RegistryClient, uid: str | None, refs: list[str]) -> str:
    """Revalidate the data held under uid against refs. Returns the token to poll."""
    uid = require_token(uid)
    client.revalidate(uid, refs)
    logger.info("Revalidation submitted for %s against %s", uid, ", ".join(refs))
    return uid
