#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
fmrctl command line interface.

Usage:
    fmrctl run                          # Full ECB exchange-rate demo
    fmrctl run -f recipe.yaml           # Demo from a custom recipe
    fmrctl up                           # Start the registry and wait until ready
    fmrctl submit --url URL             # Upload a structure document
    fmrctl load --upload-url URL --data-file-name NAME -o out.csv
    fmrctl wait TOKEN | report TOKEN | download TOKEN -o out.csv
    fmrctl revalidate TOKEN --ref URN [--ref URN ...]
    fmrctl down --remove                # Stop and delete the container
    fmrctl tool jq -- .uid              # Run a helper tool (native or containerized)
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from fmrctl.cli.demo import DemoOrchestrator, print_lines
from fmrctl.core.client import RegistryClient
from fmrctl.core.config import load_config
from fmrctl.core.container import ContainerError, ContainerManager
from fmrctl.core.download import count_observations, download_dataset
from fmrctl.core.health import WaitAbortedError, WaitTimeoutError, wait_for_registry
from fmrctl.core.jobs import EmptyTokenError, require_token, submit_load, submit_revalidation, wait_for_job
from fmrctl.core.report import fetch_load_report, render_load_report
from fmrctl.core.schema import DataLoadConfig, DemoConfig, StructureSource
from fmrctl.core.submission import render_submission_table, submit_structure
from fmrctl.core.tools import MissingDependencyError, resolve_tools
from fmrctl.logging_utils import setup_logging

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def _client(config: DemoConfig) -> RegistryClient:
    return RegistryClient.from_config(config.registry)


def _timeout(args, config: DemoConfig) -> float | None:
    if getattr(args, "timeout", None) is not None:
        return args.timeout
    return config.polling.timeout_seconds


def _wait(client: RegistryClient, uid: str, args, config: DemoConfig) -> str:
    return wait_for_job(client, uid, interval=config.polling.interval_seconds, timeout=_timeout(args, config))


def cmd_run(args, config: DemoConfig) -> int:
    orchestrator = DemoOrchestrator(
        config=config,
        client=_client(config),
        output_dir=args.output_dir,
        timeout_seconds=_timeout(args, config),
    )
    return orchestrator.run(skip_container=args.skip_container)


def cmd_up(args, config: DemoConfig) -> int:
    tools = resolve_tools(config.tools)
    ContainerManager(tools, config.container).ensure_running()
    wait_for_registry(_client(config), interval=config.polling.interval_seconds, timeout=_timeout(args, config))
    return 0


def cmd_down(args, config: DemoConfig) -> int:
    tools = resolve_tools(config.tools, pull=False)
    manager = ContainerManager(tools, config.container)
    manager.stop()
    if args.remove:
        manager.remove()
    return 0


def cmd_submit(args, config: DemoConfig) -> int:
    source = StructureSource(name="cli", url=args.url, path=args.path, template=args.template)
    results = submit_structure(_client(config), source)
    print_lines(render_submission_table(results))
    return 0


def cmd_load(args, config: DemoConfig) -> int:
    client = _client(config)
    load = DataLoadConfig(
        upload_url=args.upload_url,
        data_file_name=args.data_file_name,
        output=str(args.output),
        data_format=args.data_format,
        dsd=args.dsd,
        csv_delimiter=args.csv_delimiter,
    )
    uid = submit_load(client, load)
    _wait(client, uid, args, config)
    print_lines(render_load_report(fetch_load_report(client, uid)))
    download_dataset(client, uid, args.output)
    print(uid)
    return 0


def cmd_wait(args, config: DemoConfig) -> int:
    status = _wait(_client(config), args.token, args, config)
    print(status)
    return 0


def cmd_report(args, config: DemoConfig) -> int:
    uid = require_token(args.token)
    print_lines(render_load_report(fetch_load_report(_client(config), uid)))
    return 0


def cmd_revalidate(args, config: DemoConfig) -> int:
    client = _client(config)
    uid = submit_revalidation(client, args.token, args.ref)
    _wait(client, uid, args, config)
    print_lines(render_load_report(fetch_load_report(client, uid)))
    return 0


def cmd_download(args, config: DemoConfig) -> int:
    path = download_dataset(_client(config), args.token, args.output)
    logger.info("%s: %d observations", path, count_observations(path))
    return 0


def cmd_tool(args, config: DemoConfig) -> int:
    tools = resolve_tools(config.tools)
    tool = tools.get(args.name)
    tool_args = args.args[1:] if args.args[:1] == ["--"] else args.args
    stdin = None if sys.stdin.isatty() else sys.stdin.buffer.read()
    result = tool.run(tool_args, input=stdin, capture_output=False)
    return result.returncode


COMMANDS = {
    "run": cmd_run,
    "up": cmd_up,
    "down": cmd_down,
    "submit": cmd_submit,
    "load": cmd_load,
    "wait": cmd_wait,
    "report": cmd_report,
    "revalidate": cmd_revalidate,
    "download": cmd_download,
    "tool": cmd_tool,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fmrctl",
        description="fmrctl - registry demo automation",
        epilog="""Examples:
  fmrctl run                                     # ECB exchange-rate demo
  fmrctl run -f recipe.yaml                      # Custom recipe
  fmrctl wait 0b6e... && fmrctl report 0b6e...   # Follow a job
  fmrctl down --remove                           # Clean up
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common_args(p):
        p.add_argument("-f", "--file", type=Path, dest="config", help="Recipe YAML (default: packaged ECB demo)")

    def add_timeout(p):
        p.add_argument("--timeout", type=float, help="Give up waiting after this many seconds (default: wait forever)")

    run_parser = subparsers.add_parser("run", help="Run the full demo")
    add_common_args(run_parser)
    add_timeout(run_parser)
    run_parser.add_argument("--output-dir", type=Path, default=Path.cwd(), help="Where to save downloaded datasets")
    run_parser.add_argument(
        "--skip-container", action="store_true", help="Use an already running registry; skip docker"
    )

    up_parser = subparsers.add_parser("up", help="Start the registry container and wait until ready")
    add_common_args(up_parser)
    add_timeout(up_parser)

    down_parser = subparsers.add_parser("down", help="Stop the registry container")
    add_common_args(down_parser)
    down_parser.add_argument("--remove", action="store_true", help="Also delete the container")

    submit_parser = subparsers.add_parser("submit", help="Upload a structure document")
    add_common_args(submit_parser)
    source = submit_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Fetch the document from a URL")
    source.add_argument("--path", help="Read the document from a local file")
    source.add_argument("--template", help="Render a packaged template")

    load_parser = subparsers.add_parser("load", help="Load data from a URL, wait and report")
    add_common_args(load_parser)
    add_timeout(load_parser)
    load_parser.add_argument("--upload-url", required=True, help="Data URL the registry fetches")
    load_parser.add_argument("--data-file-name", required=True, help="Name recorded for the data")
    load_parser.add_argument("--data-format", default="auto")
    load_parser.add_argument("--dsd", default="prov")
    load_parser.add_argument("--csv-delimiter", default="comma")
    load_parser.add_argument("-o", "--output", type=Path, required=True, help="CSV file to write")

    wait_parser = subparsers.add_parser("wait", help="Poll a job until it finishes")
    add_common_args(wait_parser)
    wait_parser.add_argument("token")
    add_timeout(wait_parser)

    report_parser = subparsers.add_parser("report", help="Print the load report of a job")
    add_common_args(report_parser)
    report_parser.add_argument("token")

    reval_parser = subparsers.add_parser("revalidate", help="Revalidate loaded data against structures")
    add_common_args(reval_parser)
    reval_parser.add_argument("token")
    reval_parser.add_argument("--ref", action="append", required=True, help="Structure URN (repeatable)")
    add_timeout(reval_parser)

    download_parser = subparsers.add_parser("download", help="Download a job's dataset as SDMX-CSV")
    add_common_args(download_parser)
    download_parser.add_argument("token")
    download_parser.add_argument("-o", "--output", type=Path, required=True)

    tool_parser = subparsers.add_parser("tool", help="Run a helper tool, containerized if not installed")
    add_common_args(tool_parser)
    tool_parser.add_argument("name")
    tool_parser.add_argument("args", nargs=argparse.REMAINDER)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    try:
        return COMMANDS[args.command](args, config)
    except MissingDependencyError as e:
        logger.error("Error: %s", e)
        return 1
    except EmptyTokenError as e:
        logger.error("%s", e)
        return 1
    except (ContainerError, WaitTimeoutError, WaitAbortedError, KeyError, OSError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        logging.debug("Full traceback:", exc_info=True)
        return 1


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
