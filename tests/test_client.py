# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for the registry HTTP client."""

from unittest.mock import MagicMock

import pytest
import requests

from fmrctl.contract import DataLoadPayload
from fmrctl.core.client import RegistryClient
from fmrctl.core.schema import CSV_MEDIA_TYPE, RegistryConfig


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return RegistryClient.from_config(RegistryConfig(base_url="http://localhost:8080/"), session=session)


def response(status_code=200, json_data=None, content=b"", text=""):
    resp = MagicMock(status_code=status_code, content=content, text=text)
    resp.json.return_value = json_data
    resp.iter_content.return_value = [content[i : i + 4] for i in range(0, len(content), 4)]
    return resp


class TestFromConfig:
    def test_strips_trailing_slash(self, client):
        assert client.base_url == "http://localhost:8080"
        assert client.url("/ws/public/data/load") == "http://localhost:8080/ws/public/data/load"

    def test_uses_configured_credentials(self):
        client = RegistryClient.from_config(RegistryConfig(username="admin", password="secret"), session=MagicMock())

        assert (client.username, client.password) == ("admin", "secret")


class TestReadiness:
    def test_ready_on_success(self, client, session):
        session.head.return_value = response(200)

        assert client.is_ready() is True
        assert session.head.call_args[0][0] == "http://localhost:8080/ws/fusion/info/product"

    def test_not_ready_on_http_error(self, client, session):
        session.head.return_value = response(503)

        assert client.is_ready() is False

    def test_not_ready_on_connection_error(self, client, session):
        session.head.side_effect = requests.exceptions.ConnectionError("refused")

        assert client.is_ready() is False


class TestSubmitStructures:
    def test_posts_with_auth_and_replace_header(self, client, session):
        session.post.return_value = response(text="<ok/>")

        assert client.submit_structures("<structures/>") == "<ok/>"

        args, kwargs = session.post.call_args
        assert args[0] == "http://localhost:8080/ws/secure/sdmxapi/rest"
        assert kwargs["data"] == b"<structures/>"
        assert kwargs["auth"] == ("root", "password")
        assert kwargs["headers"] == {"Content-Type": "application/xml", "Action": "Replace"}

    def test_transport_failure_returns_empty(self, client, session):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        assert client.submit_structures(b"<structures/>") == ""


class TestFetch:
    def test_returns_body(self, client, session):
        session.get.return_value = response(content=b"<Structure/>")

        assert client.fetch("https://registry.sdmx.org/x") == b"<Structure/>"

    def test_transport_failure_returns_empty(self, client, session):
        session.get.side_effect = requests.exceptions.Timeout("slow")

        assert client.fetch("https://registry.sdmx.org/x") == b""


class TestLoadData:
    def test_sends_multipart_fields(self, client, session):
        session.post.return_value = response(json_data={"uid": "abc"})
        payload = DataLoadPayload(upload_url="https://data/x", data_file_name="x")

        assert client.load_data(payload) == "abc"

        files = session.post.call_args.kwargs["files"]
        assert files["uploadUrl"] == (None, "https://data/x")
        assert files["uploadFile"] == (None, "undefined")
        assert set(files) == {
            "uploadFile", "dataUploadType", "uploadUrl", "dataFileName", "dataFormat", "dsd", "csvDelimiter",
        }

    def test_missing_uid_returns_empty(self, client, session):
        session.post.return_value = response(json_data={"error": "bad request"})

        assert client.load_data(DataLoadPayload(upload_url="u", data_file_name="f")) == ""

    def test_non_json_returns_empty(self, client, session):
        resp = response(status_code=500)
        resp.json.side_effect = ValueError("not json")
        session.post.return_value = resp

        assert client.load_data(DataLoadPayload(upload_url="u", data_file_name="f")) == ""


class TestStatusAndRevalidate:
    def test_load_status_passes_uid(self, client, session):
        session.get.return_value = response(json_data={"Status": "Running"})

        assert client.load_status("abc") == {"Status": "Running"}
        assert session.get.call_args.kwargs["params"] == {"uid": "abc"}

    def test_load_status_failure_returns_empty(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        assert client.load_status("abc") == {}

    def test_revalidate_body(self, client, session):
        session.post.return_value = response(json_data={"uid": "abc"})
        refs = ["urn:sdmx:org.sdmx.infomodel.datastructure.Dataflow=SDMX:EXR(1.0)"]

        assert client.revalidate("abc", refs) == {"uid": "abc"}

        args, kwargs = session.post.call_args
        assert args[0] == "http://localhost:8080/ws/public/data/revalidate"
        assert kwargs["json"] == {"UID": "abc", "SRef": refs}

    def test_revalidate_non_object_response(self, client, session):
        session.post.return_value = response(json_data=["abc"])

        assert client.revalidate("abc", ["urn:x"]) == {}


class TestDownload:
    def test_writes_body_with_csv_accept_header(self, client, session, tmp_path):
        session.get.return_value = response(content=b"A,B\n1,2\n")
        dest = tmp_path / "out.csv"

        assert client.download("abc", dest) == dest
        assert dest.read_bytes() == b"A,B\n1,2\n"
        kwargs = session.get.call_args.kwargs
        assert kwargs["headers"] == {"Accept": CSV_MEDIA_TYPE}
        assert kwargs["params"] == {"uid": "abc"}
        assert kwargs["stream"] is True

    def test_interrupted_stream_keeps_received_chunks(self, client, session, tmp_path):
        def chunks(chunk_size):
            yield b"A,B\n"
            raise requests.exceptions.ChunkedEncodingError("reset")

        resp = response()
        resp.iter_content.side_effect = chunks
        session.get.return_value = resp
        dest = tmp_path / "out.csv"

        assert client.download("abc", dest) == dest
        assert dest.read_bytes() == b"A,B\n"

    def test_transport_failure_leaves_empty_file(self, client, session, tmp_path):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        dest = tmp_path / "out.csv"

        client.download("abc", dest)

        assert dest.read_bytes() == b""
