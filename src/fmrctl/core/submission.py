# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Structure submission and SubmissionResult rendering.

The registry answers a structure upload with an SDMX-ML 2.1 registry message
listing one SubmissionResult per maintainable artefact. The parser is lenient:
an empty or malformed response gives an empty or partial result list instead
of an error.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from lxml import etree

from fmrctl.core.client import RegistryClient
from fmrctl.core.formatting import render_table
from fmrctl.core.schema import StructureSource
from fmrctl.core.templates import render_structure_template

logger = logging.getLogger(__name__)

NAMESPACES = {
    "reg": "http://www.sdmx.org/resources/sdmxml/schemas/v2_1/registry",
    "message": "http://www.sdmx.org/resources/sdmxml/schemas/v2_1/message",
    "com": "http://www.sdmx.org/resources/sdmxml/schemas/v2_1/common",
}

SUBMISSION_HEADER = ("Action", "URN", "Status")


@dataclass(frozen=True)
class SubmissionResult:
    action: str
    urn: str
    status: str

    def as_row(self) -> tuple[str, str, str]:
        return (self.action, self.urn, self.status)


def _first(node, path: str) -> str:
    found = node.xpath(path, namespaces=NAMESPACES)
    if not found:
        return ""
    value = found[0]
    if isinstance(value, str):
        return str(value).strip()
    return (value.text or "").strip()


def parse_submission_results(xml: bytes | str | None) -> list[SubmissionResult]:
    """Extract (action, URN, status) from every reg:SubmissionResult element."""
    if not xml:
        return []
    if isinstance(xml, str):
        xml = xml.encode("utf-8")

    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml, parser)
    except etree.XMLSyntaxError as e:
        logger.warning("Could not parse submission response: %s", e)
        return []
    if root is None:
        logger.warning("Submission response is not XML")
        return []

    results = []
    for node in root.xpath("//reg:SubmissionResult", namespaces=NAMESPACES):
        results.append(
            SubmissionResult(
                action=_first(node, "reg:SubmittedStructure/@action"),
                urn=_first(node, "reg:SubmittedStructure/reg:MaintainableObject/URN"),
                status=_first(node, "reg:StatusMessage/@status"),
            )
        )
    return results


def render_submission_table(results: list[SubmissionResult]) -> list[str]:
    """One header line plus one line per result."""
    return render_table(SUBMISSION_HEADER, [result.as_row() for result in results])


def read_structure(client: RegistryClient, source: StructureSource, prepared: datetime | None = None) -> bytes:
    """Load the XML document a source points at."""
    if source.url:
        return client.fetch(source.url)
    if source.path:
        return Path(source.path).read_bytes()
    if source.template:
        return render_structure_template(source.template, prepared=prepared).encode("utf-8")
    raise ValueError(f"Structure source {source.name!r} has no url, path or template")


def submit_structure(
    client: RegistryClient,
    source: StructureSource,
    prepared: datetime | None = None,
) -> list[SubmissionResult]:
    """Push one structure source to the registry and parse the outcome."""
    document = read_structure(client, source, prepared=prepared)
    response = client.submit_structures(document)
    results = parse_submission_results(response)
    logger.debug("%s: %d submission results", source.name, len(results))
    return results
