# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Request payload models for the registry data API contract."""

from pydantic import BaseModel, ConfigDict, Field

from fmrctl.contract.enums import DataUploadType


class DataLoadPayload(BaseModel):
    """Multipart form for POST /ws/public/data/load."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    upload_file: str = Field("undefined", alias="uploadFile", description="File part (unused for URL uploads)")
    data_upload_type: DataUploadType = Field(DataUploadType.URL, alias="dataUploadType")
    upload_url: str = Field(..., alias="uploadUrl", description="Remote URL the registry fetches data from")
    data_file_name: str = Field(..., alias="dataFileName", description="Name recorded for the uploaded data")
    data_format: str = Field("auto", alias="dataFormat", description="Input data format, auto-detected by default")
    dsd: str = Field("prov", description="Structure resolution mode")
    csv_delimiter: str = Field("comma", alias="csvDelimiter", description="Delimiter for CSV input")

    def form_fields(self) -> dict[str, str]:
        """Return the payload keyed by wire field names."""
        return self.model_dump(by_alias=True)


class RevalidatePayload(BaseModel):
    """JSON body for POST /ws/public/data/revalidate."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., alias="UID", description="Token of a previously loaded dataset")
    structure_refs: list[str] = Field(..., alias="SRef", description="URNs of structures to validate against")
