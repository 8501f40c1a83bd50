# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Lifecycle of the Docker container hosting the registry."""

import logging
from dataclasses import dataclass
from enum import Enum

from fmrctl.core.schema import ContainerConfig
from fmrctl.core.tools import ToolSet

logger = logging.getLogger(__name__)


class ContainerState(str, Enum):
    MISSING = "missing"
    STOPPED = "stopped"
    RUNNING = "running"


class ContainerError(RuntimeError):
    """A docker command needed to bring up the container failed."""


@dataclass
class ContainerManager:
    """Create, start and stop the named registry container.

    Usage:
        manager = ContainerManager(tools, config.container)
        manager.ensure_running()
    """

    tools: ToolSet
    config: ContainerConfig

    @property
    def name(self) -> str:
        return self.config.name

    def state(self) -> ContainerState:
        runtime = self.tools.runtime
        if runtime.run(["inspect", self.name]).returncode != 0:
            return ContainerState.MISSING

        result = runtime.run(["inspect", "-f", "{{.State.Running}}", self.name])
        if result.stdout.decode().strip() == "true":
            return ContainerState.RUNNING
        return ContainerState.STOPPED

    def run_args(self) -> list[str]:
        """Arguments for ``docker run`` creating the container."""
        args = ["run", "-d", "--name", self.name, "-p", f"{self.config.port}:{self.config.port}"]
        for key, value in self.config.environment.items():
            args.extend(["-e", f"{key}={value}"])
        args.append(self.config.image)
        return args

    def ensure_running(self) -> ContainerState:
        """Create-and-start if absent, start if stopped, no-op if running.

        Returns:
            State observed before any action was taken

        Raises:
            ContainerError: If docker run/start exits non-zero
        """
        state = self.state()

        if state == ContainerState.RUNNING:
            logger.info("Container %s is already running.", self.name)
        elif state == ContainerState.STOPPED:
            logger.info("Container %s exists. Starting container %s...", self.name, self.name)
            self._check(self.tools.runtime.run(["start", self.name]), "start")
        else:
            logger.info("Creating and starting container %s...", self.name)
            self._check(self.tools.runtime.run(self.run_args()), "run")

        return state

    def stop(self) -> bool:
        logger.info("Stopping container %s...", self.name)
        return self.tools.runtime.run(["stop", self.name]).returncode == 0

    def remove(self) -> bool:
        logger.info("Removing container %s...", self.name)
        return self.tools.runtime.run(["rm", self.name]).returncode == 0

    def _check(self, result, action: str) -> None:
        if result.returncode != 0:
            stderr = (result.stderr or b"").decode(errors="replace").strip()
            raise ContainerError(f"docker {action} {self.name} failed (exit code {result.returncode}): {stderr}")
