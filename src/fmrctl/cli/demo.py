# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end registry demo.

Runs, in order:
1. Preflight: container runtime and helper tools
2. Registry container start and readiness wait
3. Structure uploads, one table per source
4. Data load: submit, wait, report, download
5. Revalidations: submit, wait, report, download
6. Observation counts per downloaded file
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from rich.console import Console

from fmrctl.core.client import RegistryClient
from fmrctl.core.container import ContainerError, ContainerManager
from fmrctl.core.download import count_observations, download_dataset
from fmrctl.core.health import WaitAbortedError, WaitTimeoutError, wait_for_registry
from fmrctl.core.jobs import EmptyTokenError, submit_load, submit_revalidation, wait_for_job
from fmrctl.core.report import fetch_load_report, render_load_report
from fmrctl.core.schema import DemoConfig, RevalidationConfig, StructureSource
from fmrctl.core.submission import render_submission_table, submit_structure
from fmrctl.core.tools import MissingDependencyError, ToolSet, resolve_tools
from fmrctl.logging_utils import PACKAGE, SERVER, WRENCH, error, section, step, success

logger = logging.getLogger(__name__)

console = Console()


def print_lines(lines: list[str]) -> None:
    for line in lines:
        console.print(line, markup=False, highlight=False, soft_wrap=True)


@dataclass
class DemoOrchestrator:
    """Drive the registry through the demo recipe.

    Usage:
        config = load_config(recipe_path)
        orchestrator = DemoOrchestrator(config, RegistryClient.from_config(config.registry))
        exit_code = orchestrator.run()
    """

    config: DemoConfig
    client: RegistryClient
    tools: ToolSet | None = None
    output_dir: Path = field(default_factory=Path.cwd)
    prepared: datetime | None = None
    stop_event: threading.Event | None = None
    timeout_seconds: float | None = None
    echo: Callable[[list[str]], None] = print_lines

    @property
    def interval(self) -> float:
        return self.config.polling.interval_seconds

    @property
    def timeout(self) -> float | None:
        """Explicit timeout_seconds, else the recipe's polling timeout."""
        if self.timeout_seconds is not None:
            return self.timeout_seconds
        return self.config.polling.timeout_seconds

    def preflight(self) -> ToolSet:
        section("Running pre-checks", WRENCH)
        if self.tools is None:
            self.tools = resolve_tools(self.config.tools)
        for name in self.tools.names:
            tool = self.tools.get(name)
            logger.info("%-10s %s", name, "container" if tool.containerized else tool.command([])[0])
        return self.tools

    def bootstrap(self) -> None:
        section("Starting registry", SERVER)
        tools = self.tools if self.tools is not None else self.preflight()
        ContainerManager(tools, self.config.container).ensure_running()
        wait_for_registry(self.client, interval=self.interval, timeout=self.timeout, stop_event=self.stop_event)

    def submit_structures(self) -> None:
        for source in self.config.structures:
            self.submit_structure(source)

    def submit_structure(self, source: StructureSource) -> None:
        section(source.description or f"Submit {source.name}", PACKAGE)
        results = submit_structure(self.client, source, prepared=self.prepared)
        self.echo(render_submission_table(results))

    def wait_and_report(self, uid: str) -> str:
        status = wait_for_job(
            self.client, uid, interval=self.interval, timeout=self.timeout, stop_event=self.stop_event
        )
        self.echo(render_load_report(fetch_load_report(self.client, uid)))
        return status

    def load_data(self) -> str | None:
        """Submit the data load and download its dataset. Returns the job token."""
        load = self.config.data_load
        if load is None:
            return None

        section(load.description or "Load data", PACKAGE)
        uid = submit_load(self.client, load)
        self.wait_and_report(uid)

        step(f"Download {load.label or uid} in csv format.")
        download_dataset(self.client, uid, self.output_dir / load.output)
        return uid

    def revalidate(self, uid: str, reval: RevalidationConfig) -> None:
        section(reval.description or f"Revalidate against {', '.join(reval.refs)}", PACKAGE)
        submit_revalidation(self.client, uid, reval.refs)
        self.wait_and_report(uid)

        step(f"Download {reval.label or uid} in csv format.")
        download_dataset(self.client, uid, self.output_dir / reval.output)

    def summarize(self) -> None:
        files = self.config.output_files
        if files:
            section("Summary")
            width = max(len(label) for label, _ in files)
            for label, output in files:
                logger.info("%s %d observations", label.ljust(width), count_observations(self.output_dir / output))
        success("Done.")
        logger.info(
            "For clean-up, use: docker stop %s; docker rm %s (or fmrctl down --remove)",
            self.config.container.name,
            self.config.container.name,
        )

    def run(self, skip_container: bool = False) -> int:
        """Run the complete demo. Returns the process exit code."""
        logger.info("Registry demo: %s", self.config.name)
        logger.info("Registry: %s", self.client.base_url)

        try:
            if skip_container:
                wait_for_registry(
                    self.client, interval=self.interval, timeout=self.timeout, stop_event=self.stop_event
                )
            else:
                self.preflight()
                self.bootstrap()

            self.submit_structures()

            uid = self.load_data()
            if uid is not None:
                for reval in self.config.revalidations:
                    self.revalidate(uid, reval)

            self.summarize()
        except MissingDependencyError as e:
            error(f"Error: {e}")
            return 1
        except EmptyTokenError as e:
            error(str(e))
            return 1
        except (ContainerError, WaitTimeoutError, WaitAbortedError) as e:
            error(str(e))
            return 1

        return 0
