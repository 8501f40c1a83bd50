# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Dataset download and observation counts."""

import logging
from pathlib import Path

from fmrctl.core.client import RegistryClient
from fmrctl.core.jobs import require_token
from fmrctl.core.schema import CSV_MEDIA_TYPE

logger = logging.getLogger(__name__)


def download_dataset(client: RegistryClient, uid: str, dest: Path | str, media_type: str = CSV_MEDIA_TYPE) -> Path:
    """Save the dataset held under uid to dest."""
    uid = require_token(uid)
    path = client.download(uid, Path(dest), media_type=media_type)
    logger.info("Saved %s to %s", uid, path)
    return path


def count_observations(path: Path | str) -> int:
    """Data lines in a CSV file (all lines minus the header)."""
    path = Path(path)
    if not path.exists():
        return 0
    with open(path, "rb") as f:
        lines = sum(1 for _ in f)
    return max(lines - 1, 0)
