"""
Entry point for the sweagle_step component.

Each subcommand is one build step: validate, upload, snapshot or export. A
fatal failure exits with status 1 so the enclosing CI job stops; soft failures
are only logged.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .application.domain import NO_LIMIT, ServiceEndpoint
from .application.exceptions import SweagleStepError
from .application.service import ConfigStepService
from .infrastructure.containers import Container
from .infrastructure.host import StaticSecret, workspace_root

logger = logging.getLogger(__name__)


def setup_logging(level: str):
    """Applies basic logging configuration."""
    logging.basicConfig(level=level)


async def _validate(service: ConfigStepService, endpoint, args):
    return await service.validate_config(
        endpoint,
        args.mds,
        mark_failed=args.mark_failed,
        warn_max=args.warn_max,
        err_max=args.err_max,
        show_results=args.show_results,
    )


async def _upload(service: ConfigStepService, endpoint, args):
    return await service.upload_config(
        endpoint,
        args.file,
        args.node_path,
        args.format,
        mark_failed=args.mark_failed,
        workspace_root=workspace_root(os.environ),
    )


async def _snapshot(service: ConfigStepService, endpoint, args):
    return await service.snapshot_config(
        endpoint,
        args.mds,
        description=args.description,
        tag=args.tag,
        mark_failed=args.mark_failed,
    )


async def _export(service: ConfigStepService, endpoint, args):
    return await service.export_config(
        endpoint,
        args.mds,
        args.output,
        args.exporter,
        args=args.args,
        format=args.format,
        mark_failed=args.mark_failed,
        workspace_root=workspace_root(os.environ),
    )


async def run_application(
    args: argparse.Namespace, container: Optional[Container] = None
) -> int:
    """Wires and runs one build step using the DI container."""

    container = container or Container()
    config = container.config()
    setup_logging(level=config.get("logging.level", "INFO"))
    if getattr(args, "show_results", False):
        # Report bodies go to the job sink at debug level.
        logging.getLogger("sweagle.job").setLevel(logging.DEBUG)

    endpoint = ServiceEndpoint(
        base_url=args.url or config.get("sweagle.url", ""),
        credential=StaticSecret(args.token or config.get("sweagle.api_token")),
    )
    step_service = container.step_service()

    try:
        body = await args.handler(step_service, endpoint, args)
    except SweagleStepError as e:
        logger.error(f"Build step failed: {e}")
        return 1
    finally:
        await container.http_client().aclose()

    if body is not None:
        print(body)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sweagle-step",
        description="Sweagle configuration steps for CI pipelines",
    )
    parser.add_argument(
        "--url", help="Sweagle tenant URL (defaults to sweagle.url setting)"
    )
    parser.add_argument(
        "--token",
        help="Sweagle API token (defaults to sweagle.api_token setting)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    def add_command(name, handler, help):
        command = commands.add_parser(name, help=help)
        command.add_argument(
            "--mark-failed",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Abort the job on failure instead of logging and continuing.",
        )
        command.set_defaults(handler=handler)
        return command

    validate = add_command("validate", _validate, "Validate an MDS.")
    validate.add_argument("--mds", required=True, help="MDS name")
    validate.add_argument(
        "--warn-max", type=int, default=NO_LIMIT,
        help="Maximum warnings tolerated, -1 for no limit.",
    )
    validate.add_argument(
        "--err-max", type=int, default=NO_LIMIT,
        help="Maximum errors tolerated, -1 for no limit.",
    )
    validate.add_argument(
        "--show-results", action="store_true",
        help="Log the full report when a threshold is exceeded.",
    )

    upload = add_command("upload", _upload, "Upload a workspace file.")
    upload.add_argument(
        "--file", required=True, help="File path relative to the workspace"
    )
    upload.add_argument("--node-path", required=True, help="Target node path")
    upload.add_argument(
        "--format", required=True, help="Data format, e.g. json, yaml, props"
    )

    snapshot = add_command(
        "snapshot", _snapshot, "Snapshot pending data of an MDS."
    )
    snapshot.add_argument("--mds", required=True, help="MDS name")
    snapshot.add_argument("--description", default="", help="Snapshot description")
    snapshot.add_argument("--tag", default="", help="Snapshot tag")

    export = add_command("export", _export, "Export an MDS into a file.")
    export.add_argument("--mds", required=True, help="MDS name")
    export.add_argument("--exporter", required=True, help="Exporter name")
    export.add_argument("--output", required=True, help="Destination file")
    export.add_argument("--args", default="", help="Exporter arguments")
    export.add_argument("--format", default="json", help="Output format")

    return parser


def main(argv: Optional[List[str]] = None):
    cli_args = build_parser().parse_args(argv)
    sys.exit(asyncio.run(run_application(cli_args)))


if __name__ == "__main__":
    main()
