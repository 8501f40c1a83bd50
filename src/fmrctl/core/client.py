# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
HTTP client for the registry REST API.

Transport failures are logged and passed through as empty payloads; nothing is
retried. Callers see a failed call as an empty table, an empty token or an
empty download.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from fmrctl.contract import DataLoadPayload, LoadResponse, RevalidatePayload, SubmitAction
from fmrctl.core.schema import CSV_MEDIA_TYPE, RegistryConfig

logger = logging.getLogger(__name__)

PRODUCT_INFO_PATH = "/ws/fusion/info/product"
STRUCTURE_PATH = "/ws/secure/sdmxapi/rest"
LOAD_PATH = "/ws/public/data/load"
LOAD_STATUS_PATH = "/ws/public/data/loadStatus"
REVALIDATE_PATH = "/ws/public/data/revalidate"
DOWNLOAD_PATH = "/ws/public/data/download"

DOWNLOAD_CHUNK_SIZE = 64 * 1024


@dataclass
class RegistryClient:
    """Thin wrapper over the registry endpoints.

    Usage:
        client = RegistryClient.from_config(config.registry)
        xml = client.submit_structures(client.fetch(url))
        uid = client.load_data(payload)
    """

    base_url: str
    username: str = "root"
    password: str = "password"
    timeout: float = 60.0
    session: Any = field(default_factory=requests.Session)

    @classmethod
    def from_config(cls, registry: RegistryConfig, session: Any = None) -> "RegistryClient":
        return cls(
            base_url=registry.base_url.rstrip("/"),
            username=registry.username,
            password=registry.password,
            timeout=registry.request_timeout,
            session=session if session is not None else requests.Session(),
        )

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def is_ready(self) -> bool:
        """Readiness probe: HEAD on the product info endpoint."""
        try:
            response = self.session.head(self.url(PRODUCT_INFO_PATH), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("Readiness probe failed: %s", e)
            return False
        return response.status_code < 400

    def fetch(self, url: str) -> bytes:
        """Plain GET of a remote document."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            return b""
        if response.status_code >= 400:
            logger.warning("Fetching %s returned HTTP %d", url, response.status_code)
        return response.content

    def submit_structures(self, xml: bytes | str, action: SubmitAction = SubmitAction.REPLACE) -> str:
        """Upload a structure document and return the registry's XML response."""
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        try:
            response = self.session.post(
                self.url(STRUCTURE_PATH),
                data=xml,
                auth=(self.username, self.password),
                headers={"Content-Type": "application/xml", "Action": action.value},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Structure submission failed: %s", e)
            return ""
        logger.debug("Structure submission returned HTTP %d", response.status_code)
        return response.text

    def load_data(self, payload: DataLoadPayload) -> str:
        """Submit a data load job. Returns the job token, or "" if none was issued."""
        files = {name: (None, value) for name, value in payload.form_fields().items()}
        try:
            response = self.session.post(self.url(LOAD_PATH), files=files, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Data load submission failed: %s", e)
            return ""
        return _uid_from(response)

    def load_status(self, uid: str) -> dict[str, Any]:
        """Current status payload of a job ({} if unavailable)."""
        try:
            response = self.session.get(self.url(LOAD_STATUS_PATH), params={"uid": uid}, timeout=self.timeout)
            payload = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning("Load status request for %s failed: %s", uid, e)
            return {}
        return payload if isinstance(payload, dict) else {}

    def revalidate(self, uid: str, refs: list[str]) -> dict[str, Any]:
        """Revalidate loaded data against other structures; the token stays the same."""
        body = RevalidatePayload(uid=uid, structure_refs=refs)
        try:
            response = self.session.post(
                self.url(REVALIDATE_PATH),
                json=body.model_dump(by_alias=True),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            result = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning("Revalidation of %s failed: %s", uid, e)
            return {}
        return result if isinstance(result, dict) else {}

    def download(self, uid: str, dest: Path, media_type: str = CSV_MEDIA_TYPE) -> Path:
        """Stream the dataset of a job to dest in the requested format."""
        dest = Path(dest)
        try:
            response = self.session.get(
                self.url(DOWNLOAD_PATH),
                params={"uid": uid},
                headers={"Accept": media_type},
                stream=True,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Download of %s failed: %s", uid, e)
            dest.write_bytes(b"")
            return dest

        with response:
            if response.status_code >= 400:
                logger.warning("Download of %s returned HTTP %d", uid, response.status_code)
            with open(dest, "wb") as f:
                try:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                except requests.exceptions.RequestException as e:
                    logger.warning("Download of %s interrupted: %s", uid, e)
        return dest
        if response.status_code >= 400:
            logger.warning("Download of %s returned HTTP %d", uid, response.status_code)
        dest.write_bytes(response.content)
        return dest


def _uid_from(response) -> str:
    try:
        return LoadResponse.model_validate(response.json()).uid or ""
    except ValueError as e:
        logger.warning("Unexpected load response (HTTP %d): %s", response.status_code, e)
        return ""
