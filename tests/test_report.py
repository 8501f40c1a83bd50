# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for load report extraction."""

from unittest.mock import MagicMock

import pytest

from fmrctl.core.report import LoadReport, count_errors, fetch_load_report, render_load_report

DSD = "urn:sdmx:org.sdmx.infomodel.datastructure.DataStructure=ECB:ECB_EXR1(1.0)"


def status_payload(error_lengths: list[int], errors_flag: bool = True) -> dict:
    payload = {
        "Status": "Complete",
        "Datasets": [
            {
                "DSD": DSD,
                "KeysCount": 10,
                "ObsCount": 250,
                "GroupsCount": 3,
                "ValidationReport": [{"Errors": [{"Message": "x"}] * n} for n in error_lengths],
            }
        ],
    }
    if errors_flag:
        payload["Errors"] = True
    return payload


class TestCountErrors:
    """Test count_errors()."""

    def test_zero_without_errors_key(self):
        assert count_errors(status_payload([2, 0, 1], errors_flag=False)) == 0

    def test_sums_nested_error_lists(self):
        assert count_errors(status_payload([2, 0, 1])) == 3

    def test_sums_across_datasets(self):
        payload = status_payload([1])
        payload["Datasets"].append({"DSD": DSD, "ValidationReport": [{"Errors": [{}, {}]}]})

        assert count_errors(payload) == 3

    def test_false_errors_flag_counts_zero(self):
        payload = status_payload([4])
        payload["Errors"] = False

        assert count_errors(payload) == 0

    @pytest.mark.parametrize("flag", [0, "", []])
    def test_non_null_falsy_flag_still_counts(self, flag):
        payload = status_payload([2, 1])
        payload["Errors"] = flag

        assert count_errors(payload) == 3

    def test_null_errors_flag_counts_zero(self):
        payload = status_payload([4])
        payload["Errors"] = None

        assert count_errors(payload) == 0

    def test_missing_report_entries_count_zero(self):
        payload = {"Errors": True, "Datasets": [{"DSD": DSD}, {"ValidationReport": [{}]}]}

        assert count_errors(payload) == 0


class TestLoadReport:
    """Test LoadReport.from_status() and rendering."""

    def test_uses_first_dataset(self):
        report = LoadReport.from_status(status_payload([2, 0, 1]))

        assert report == LoadReport(dsd=DSD, keys_count=10, obs_count=250, groups_count=3, error_count=3)

    def test_no_datasets(self):
        report = LoadReport.from_status({"Status": "Error"})

        assert report.dsd is None
        assert report.as_row() == ("null", "null", "null", "null", "0")

    def test_malformed_payload_passes_through(self):
        report = LoadReport.from_status({"Status": "Complete", "Datasets": "oops"})

        assert report.error_count == 0
        assert report.dsd is None

    def test_render_has_header_dashes_and_row(self):
        lines = render_load_report(LoadReport.from_status(status_payload([1])))

        assert len(lines) == 3
        assert lines[0].split() == ["DSD", "KeysCount", "ObsCount", "GroupsCount", "ErrorCount"]
        assert lines[1].split()[0] == "-" * len(DSD)
        assert lines[2].split() == [DSD, "10", "250", "3", "1"]

    def test_fetch_reads_status_endpoint(self):
        client = MagicMock()
        client.load_status.return_value = status_payload([])

        report = fetch_load_report(client, "abc")

        client.load_status.assert_called_once_with("abc")
        assert report.obs_count == 250
