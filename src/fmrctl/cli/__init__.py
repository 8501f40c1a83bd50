# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
CLI modules for fmrctl.

Available commands:
- main: fmrctl entry point (run, up, down, submit, load, wait, report, revalidate, download, tool)
- demo: End-to-end demo orchestration
"""
