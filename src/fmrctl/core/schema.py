#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Frozen dataclass schema definitions for demo configuration.

Uses marshmallow_dataclass for type-safe configuration with validation.
All config classes are frozen (immutable) after creation.
"""

from dataclasses import field
from typing import ClassVar, Dict, List, Optional, Type

from marshmallow import Schema, ValidationError, validate, validates_schema
from marshmallow_dataclass import dataclass

from fmrctl.contract.enums import DataUploadType

CSV_MEDIA_TYPE = "application/vnd.sdmx.data+csv;version=1.0.0"


# ============================================================================
# Workspace Defaults (fmrctl.yaml)
# ============================================================================


@dataclass
class WorkspaceConfig:
    """Workspace-wide overrides from fmrctl.yaml."""

    base_url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    container_name: Optional[str] = None
    container_image: Optional[str] = None
    poll_interval_seconds: Optional[float] = None
    poll_timeout_seconds: Optional[float] = None

    Schema: ClassVar[Type[Schema]] = Schema


# ============================================================================
# Sub-Configuration Dataclasses (all frozen)
# ============================================================================


@dataclass(frozen=True)
class RegistryConfig:
    """Where the registry listens and how to authenticate."""

    base_url: str = "http://localhost:8080"
    username: str = "root"
    password: str = "password"
    request_timeout: float = 60.0

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class ContainerConfig:
    """Docker container hosting the registry."""

    name: str = "fmr"
    image: str = "sdmxio/fmr-mysql:11.19.4"
    port: int = 8080
    environment: Dict[str, str] = field(
        default_factory=lambda: {
            "SERVER_URL": "http://localhost:8080",
            "CATALINA_OPTS": "-Xmx6G",
        }
    )

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class FallbackToolConfig:
    """Containerized replacement for an auxiliary tool missing from PATH."""

    name: str
    image: str
    mount_workdir: bool = False
    pull: bool = True

    Schema: ClassVar[Type[Schema]] = Schema


def _default_fallbacks() -> List[FallbackToolConfig]:
    return [
        FallbackToolConfig(name="curl", image="alpine/curl:latest"),
        FallbackToolConfig(name="jq", image="leplusorg/xml:latest", mount_workdir=True, pull=False),
        FallbackToolConfig(name="xmlstarlet", image="leplusorg/xml:latest", mount_workdir=True),
    ]


@dataclass(frozen=True)
class ToolsConfig:
    """External tools: the container runtime plus substitutable helpers."""

    runtime: str = "docker"
    fallbacks: List[FallbackToolConfig] = field(default_factory=_default_fallbacks)

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class PollingConfig:
    """Readiness and job polling. A timeout of None waits forever."""

    interval_seconds: float = 5.0
    timeout_seconds: Optional[float] = None

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class StructureSource:
    """One structure document to push to the registry.

    Exactly one of url, path or template must be set.
    """

    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    path: Optional[str] = None
    template: Optional[str] = None

    @property
    def kind(self) -> str:
        if self.url:
            return "url"
        if self.path:
            return "path"
        return "template"

    @validates_schema
    def _exactly_one_location(self, data, **kwargs):
        given = [key for key in ("url", "path", "template") if data.get(key)]
        if len(given) != 1:
            raise ValidationError(
                f"Structure source {data.get('name')!r} needs exactly one of url, path, template (got {given or 'none'})"
            )

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class DataLoadConfig:
    """Data load job submitted to /ws/public/data/load."""

    upload_url: str
    data_file_name: str
    output: str
    label: Optional[str] = None
    description: Optional[str] = None
    data_format: str = "auto"
    dsd: str = "prov"
    csv_delimiter: str = "comma"
    upload_type: str = field(
        default=DataUploadType.URL.value,
        metadata={"validate": validate.OneOf([t.value for t in DataUploadType])},
    )

    Schema: ClassVar[Type[Schema]] = Schema


@dataclass(frozen=True)
class RevalidationConfig:
    """Revalidation of the loaded dataset against other structures."""

    refs: List[str]
    output: str
    label: Optional[str] = None
    description: Optional[str] = None

    Schema: ClassVar[Type[Schema]] = Schema


# ============================================================================
# Main Configuration Dataclass
# ============================================================================


@dataclass(frozen=True)
class DemoConfig:
    """Complete fmrctl demo configuration (frozen, immutable).

    This is the main configuration type returned by load_config().
    """

    name: str = "fmr-demo"
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    container: ContainerConfig = field(default_factory=ContainerConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    structures: List[StructureSource] = field(default_factory=list)
    data_load: Optional[DataLoadConfig] = None
    revalidations: List[RevalidationConfig] = field(default_factory=list)

    Schema: ClassVar[Type[Schema]] = Schema

    @property
    def output_files(self) -> List[tuple[str, str]]:
        """(label, path) for every dataset the demo downloads, in order."""
        files = []
        if self.data_load:
            files.append((self.data_load.label or self.data_load.output, self.data_load.output))
        for reval in self.revalidations:
            files.append((reval.label or reval.output, reval.output))
        return files
