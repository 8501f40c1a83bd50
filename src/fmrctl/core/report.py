# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Load report: counts of the first dataset in a loadStatus payload."""

import logging
from dataclasses import dataclass
from typing import Any

from fmrctl.contract import LoadStatusResponse
from fmrctl.core.client import RegistryClient
from fmrctl.core.formatting import render_table

logger = logging.getLogger(__name__)

REPORT_HEADER = ("DSD", "KeysCount", "ObsCount", "GroupsCount", "ErrorCount")


def count_errors(payload: dict[str, Any]) -> int:
    """Total validation errors across datasets.

    Zero when the top-level Errors flag is missing, null or false (any other
    value, 0 and [] included, counts as set, as jq's `if .Errors` does);
    otherwise the lengths of every Datasets[*].ValidationReport[*].Errors list
    summed.
    """
    flag = payload.get("Errors")
    if flag is None or flag is False:
        return 0

    total = 0
    for dataset in payload.get("Datasets") or []:
        for entry in dataset.get("ValidationReport") or []:
            total += len(entry.get("Errors") or [])
    return total


@dataclass(frozen=True)
class LoadReport:
    dsd: str | None
    keys_count: int | None
    obs_count: int | None
    groups_count: int | None
    error_count: int

    @classmethod
    def from_status(cls, payload: dict[str, Any]) -> "LoadReport":
        try:
            status = LoadStatusResponse.model_validate(payload)
            error_count = count_errors(payload)
        except (ValueError, AttributeError, TypeError) as e:
            logger.warning("Unexpected load status payload: %s", e)
            return cls(dsd=None, keys_count=None, obs_count=None, groups_count=None, error_count=0)

        if not status.datasets:
            return cls(dsd=None, keys_count=None, obs_count=None, groups_count=None, error_count=error_count)

        dataset = status.datasets[0]
        return cls(
            dsd=dataset.dsd,
            keys_count=dataset.keys_count,
            obs_count=dataset.obs_count,
            groups_count=dataset.groups_count,
            error_count=error_count,
        )

    def as_row(self) -> tuple[str, ...]:
        return tuple(
            "null" if value is None else str(value)
            for value in (self.dsd, self.keys_count, self.obs_count, self.groups_count, self.error_count)
        )


def render_load_report(report: LoadReport) -> list[str]:
    """Header, dash underline and one data row."""
    dsd_width = len(report.dsd or "")
    dashes = ["-" * dsd_width, *("-" * len(title) for title in REPORT_HEADER[1:])]
    return render_table(REPORT_HEADER, [dashes, report.as_row()])


def fetch_load_report(client: RegistryClient, uid: str) -> LoadReport:
    return LoadReport.from_status(client.load_status(uid))
