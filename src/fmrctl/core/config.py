#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Config loading and resolution with fmrctl.yaml integration.

This module provides:
- load_config(): Load a YAML recipe, apply workspace overrides, return typed DemoConfig
- load_workspace_config(): Read fmrctl.yaml overrides (see find_workspace_config())
- default_recipe_path(): Packaged ECB exchange-rate demo recipe
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml
from marshmallow import ValidationError

from .schema import DemoConfig, WorkspaceConfig

logger = logging.getLogger(__name__)

RECIPES_DIR = Path(__file__).parent.parent / "recipes"
DEFAULT_RECIPE = "ecb_exr.yaml"


def default_recipe_path() -> Path:
    """Path of the recipe used when no -f is given."""
    return RECIPES_DIR / DEFAULT_RECIPE


WORKSPACE_FILE = "fmrctl.yaml"


def find_workspace_config(start: Path | None = None) -> Path | None:
    """First fmrctl.yaml in start (default: cwd) or up to two parent directories."""
    start = start or Path.cwd()
    for directory in [start, *list(start.parents)[:2]]:
        candidate = directory / WORKSPACE_FILE
        if candidate.is_file():
            return candidate
    return None


def load_workspace_config() -> dict[str, Any] | None:
    """Validated fmrctl.yaml overrides, or None when absent or invalid."""
    path = find_workspace_config()
    if path is None:
        logger.debug("No %s found, using recipe as-is", WORKSPACE_FILE)
        return None

    schema = WorkspaceConfig.Schema()
    try:
        with open(path) as f:
            overrides = schema.dump(schema.load(yaml.safe_load(f) or {}))
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.warning("Ignoring %s: %s", path, e)
        return None

    logger.debug("Loaded workspace overrides from %s", path)
    return overrides


def resolve_config_with_overrides(
    user_config: dict[str, Any], workspace_config: dict[str, Any] | None
) -> dict[str, Any]:
    """
    Apply workspace overrides to a recipe.

    Workspace values win over recipe values, so one fmrctl.yaml can point every
    recipe at a different registry or container.

    Args:
        user_config: Recipe YAML as dict
        workspace_config: Overrides from fmrctl.yaml (or None)

    Returns:
        Resolved config dict
    """
    config = copy.deepcopy(user_config)

    if not workspace_config:
        return config

    mapping = {
        "base_url": ("registry", "base_url"),
        "username": ("registry", "username"),
        "password": ("registry", "password"),
        "container_name": ("container", "name"),
        "container_image": ("container", "image"),
        "poll_interval_seconds": ("polling", "interval_seconds"),
        "poll_timeout_seconds": ("polling", "timeout_seconds"),
    }

    for key, (section_name, option) in mapping.items():
        value = workspace_config.get(key)
        if value is None:
            continue
        section = config.setdefault(section_name, {})
        section[option] = value
        logger.debug("Applied workspace override %s.%s", section_name, option)

    return config


def load_config(path: Path | str | None = None) -> DemoConfig:
    """
    Load and validate a YAML recipe, applying workspace overrides.

    Args:
        path: Path to the recipe (default: packaged ECB demo recipe)

    Returns:
        DemoConfig frozen dataclass

    Raises:
        FileNotFoundError: If the recipe doesn't exist
        ValueError: If config validation fails
    """
    path = Path(path) if path is not None else default_recipe_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(user_config).__name__}")

    workspace_config = load_workspace_config()
    resolved_config = resolve_config_with_overrides(user_config, workspace_config)

    try:
        config = DemoConfig.Schema().load(resolved_config)
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e.messages}") from e

    logger.info("Loaded recipe %s from %s", config.name, path)
    return config
