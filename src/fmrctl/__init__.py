"""
fmrctl - Demo automation for a containerized SDMX metadata registry.

This package starts the registry container, uploads SDMX structure documents,
runs asynchronous data load and revalidation jobs, and downloads the results.

Key modules:
- core.config: Configuration loading and validation
- core.schema: Frozen dataclass definitions (DemoConfig, etc.)
- core.tools: Container runtime check and containerized tool fallbacks
- core.container: Registry container lifecycle
- core.client: Registry HTTP client
- core.jobs: Job submission and status polling
- core.submission / core.report: Result tables
- cli.main: Command line interface
- cli.demo: End-to-end demo orchestration
- logging_utils: Logging configuration

Usage:
    fmrctl run
    fmrctl run -f recipe.yaml
"""

__version__ = "0.1.0"

from .contract import TERMINAL_STATUSES, LoadStatus
from .core.client import RegistryClient
from .core.config import load_config
from .core.jobs import EmptyTokenError, wait_for_job
from .core.schema import DemoConfig
from .core.tools import MissingDependencyError, resolve_tools
from .logging_utils import setup_logging

__all__ = [
    # Version
    "__version__",
    # Logging
    "setup_logging",
    # Config
    "load_config",
    "DemoConfig",
    # Contract
    "LoadStatus",
    "TERMINAL_STATUSES",
    # Registry
    "RegistryClient",
    "wait_for_job",
    "EmptyTokenError",
    # Tools
    "resolve_tools",
    "MissingDependencyError",
]
