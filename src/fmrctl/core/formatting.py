# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Plain-text table rendering.

Tables are printed column aligned, the way ``column -t`` lays out delimited
text: each column is padded to its widest cell and columns are separated by
two spaces.
"""

from collections.abc import Iterable, Sequence

COLUMN_GAP = "  "


def clean_cell(value: object) -> str:
    """Render a cell as a single pipe-free line."""
    if value is None:
        return ""
    text = str(value)
    for char in ("|", "\r", "\n", "\t"):
        text = text.replace(char, " ")
    return text.strip()


def render_table(header: Sequence[str], rows: Iterable[Sequence[object]]) -> list[str]:
    """Align header and rows into lines, header first.

    Rows shorter than the header are padded with empty cells.
    """
    cells = [[clean_cell(value) for value in header]]
    for row in rows:
        line = [clean_cell(value) for value in row]
        line.extend([""] * (len(header) - len(line)))
        cells.append(line)

    widths = [max(len(line[i]) for line in cells) for i in range(len(header))]
    return [COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip() for line in cells]
