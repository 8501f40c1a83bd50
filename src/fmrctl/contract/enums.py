# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Canonical enum definitions for the registry data API contract."""

from enum import Enum


class LoadStatus(str, Enum):
    """Status values reported by /ws/public/data/loadStatus.

    The registry may report other transient values; only the members listed in
    TERMINAL_STATUSES end a polling loop.
    """

    INITIALISING = "Initialising"
    QUEUED = "Queued"
    RUNNING = "Running"
    COMPLETE = "Complete"
    INCORRECT_DSD = "IncorrectDSD"
    INVALID_REF = "InvalidRef"
    MISSING_DSD = "MissingDSD"
    ERROR = "Error"


TERMINAL_STATUSES = frozenset(
    {
        LoadStatus.COMPLETE.value,
        LoadStatus.INCORRECT_DSD.value,
        LoadStatus.INVALID_REF.value,
        LoadStatus.MISSING_DSD.value,
        LoadStatus.ERROR.value,
    }
)


class SubmitAction(str, Enum):
    """Values of the Action header accepted by the structure endpoint."""

    APPEND = "Append"
    REPLACE = "Replace"
    DELETE = "Delete"


class DataUploadType(str, Enum):
    """How the registry obtains the data file for a load job."""

    URL = "url"
    FILE = "file"
