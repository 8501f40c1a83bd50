# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Core modules for fmrctl.

This package contains:
- config: Configuration loading and validation
- schema: Frozen dataclass schemas (DemoConfig, etc.)
- tools: Container runtime check and containerized fallbacks for helper tools
- container: Registry container lifecycle
- client: Registry HTTP client
- health: Readiness polling
- submission: Structure upload and SubmissionResult tables
- templates: Packaged structure documents
- jobs: Data load / revalidation jobs and status polling
- report: Load report extraction
- download: Dataset download and observation counts
"""

from .client import RegistryClient
from .config import load_config
from .container import ContainerManager, ContainerState
from .download import count_observations, download_dataset
from .health import WaitAbortedError, WaitTimeoutError, wait_for_registry
from .jobs import EmptyTokenError, is_terminal, submit_load, submit_revalidation, wait_for_job
from .report import LoadReport, count_errors, render_load_report
from .schema import (
    ContainerConfig,
    DataLoadConfig,
    DemoConfig,
    PollingConfig,
    RegistryConfig,
    RevalidationConfig,
    StructureSource,
    ToolsConfig,
)
from .submission import SubmissionResult, parse_submission_results, render_submission_table
from .tools import MissingDependencyError, ToolSet, resolve_tools
