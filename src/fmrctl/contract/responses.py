# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Response models for the registry data API contract."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LoadResponse(BaseModel):
    """Response of POST /ws/public/data/load and /revalidate."""

    model_config = ConfigDict(extra="allow")

    uid: str = ""


class ValidationEntry(BaseModel):
    """One entry of a dataset validation report."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    errors: list | None = Field(None, alias="Errors")


class DatasetStatus(BaseModel):
    """Per-dataset summary in a load status payload."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    dsd: str | None = Field(None, alias="DSD")
    keys_count: int | None = Field(None, alias="KeysCount")
    obs_count: int | None = Field(None, alias="ObsCount")
    groups_count: int | None = Field(None, alias="GroupsCount")
    validation_report: list[ValidationEntry] = Field(default_factory=list, alias="ValidationReport")


class LoadStatusResponse(BaseModel):
    """Response of GET /ws/public/data/loadStatus."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: str | None = Field(None, alias="Status")
    errors: Any = Field(None, alias="Errors")
    datasets: list[DatasetStatus] = Field(default_factory=list, alias="Datasets")
