# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Logging setup and console helpers for fmrctl.

Demo steps are logged through the root logger with a leading symbol so a run
reads as a sequence of sections. Readiness polling writes bare dots to stdout
instead of log records, one per failed probe.
"""

import logging
import sys
from typing import TextIO

CHECK = "✓"
CROSS = "✗"
ROCKET = "🚀"
PACKAGE = "📦"
WRENCH = "🔧"
SERVER = "🖥"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty HTTP and container libraries, capped at WARNING
QUIET_LOGGERS = ("urllib3", "requests", "httpx", "docker")


def setup_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    date_format: str | None = None,
) -> None:
    """Configure the root logger to write to stdout.

    Any previous configuration is replaced, so calling this twice (once per
    CLI invocation inside one test process, say) is safe.

    Args:
        level: Logging level (default: INFO)
        format_string: Record format (default: timestamp, level, message)
        date_format: Timestamp format (default: ISO-like)
    """
    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _root(logger: logging.Logger | None) -> logging.Logger:
    return logger if logger is not None else logging.getLogger()


def section(title: str, symbol: str = WRENCH, logger: logging.Logger | None = None) -> None:
    """Log a blank line, the titled header and a rule."""
    logger = _root(logger)
    logger.info("")
    logger.info("%s %s", symbol, title)
    logger.info("-" * 60)


def success(message: str, logger: logging.Logger | None = None) -> None:
    _root(logger).info("%s %s", CHECK, message)


def error(message: str, logger: logging.Logger | None = None) -> None:
    _root(logger).error("%s %s", CROSS, message)


def step(message: str, logger: logging.Logger | None = None) -> None:
    _root(logger).info("%s %s", ROCKET, message)


def progress_dot(stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write(".")
    stream.flush()


def end_progress(stream: TextIO | None = None) -> None:
    """Terminate a line of progress dots."""
    stream = stream or sys.stdout
    stream.write("\n")
    stream.flush()
