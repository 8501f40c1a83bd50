# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Shared API contract for the registry data endpoints.

This package defines the Pydantic models and enums exchanged with the
registry's /ws/public/data API. It has zero internal imports; only depends on pydantic.

Usage (client):
    from fmrctl.contract import DataLoadPayload, LoadStatusResponse, TERMINAL_STATUSES

Usage (mock server in tests):
    from fmrctl.contract import LoadResponse, LoadStatus
"""

from fmrctl.contract.enums import TERMINAL_STATUSES, DataUploadType, LoadStatus, SubmitAction
from fmrctl.contract.requests import DataLoadPayload, RevalidatePayload
from fmrctl.contract.responses import DatasetStatus, LoadResponse, LoadStatusResponse, ValidationEntry

__all__ = [
    "TERMINAL_STATUSES",
    "DataUploadType",
    "LoadStatus",
    "SubmitAction",
    "DataLoadPayload",
    "RevalidatePayload",
    "DatasetStatus",
    "LoadResponse",
    "LoadStatusResponse",
    "ValidationEntry",
]
