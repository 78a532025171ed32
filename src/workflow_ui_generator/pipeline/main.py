"""CLI entrypoint for the workflow UI generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from pydantic import ValidationError

from workflow_ui_generator import __version__
from workflow_ui_generator.core.builder import WorkflowAppBuilder
from workflow_ui_generator.core.config import GeneratorConfig
from workflow_ui_generator.pipeline.errors import (
    ArchiveError,
    GenerationError,
    MalformedWorkflowError,
)
from workflow_ui_generator.pipeline.publish import DeploymentRecord, DeploymentStatus

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2
EXIT_TIMED_OUT = 4


def _read_workflow(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _exit_code_for(record: DeploymentRecord) -> int:
    if record.status is DeploymentStatus.READY:
        return EXIT_OK
    if record.status is DeploymentStatus.TIMED_OUT:
        return EXIT_TIMED_OUT
    if record.status is DeploymentStatus.BUILDING and record.cancelled:
        return EXIT_OK
    return EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-ui",
        description="Generate, package and publish React UIs for n8n workflows",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-ui-generator {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Summarize a workflow without generating")
    analyze.add_argument("workflow", help="Path to the workflow JSON file ('-' for stdin)")

    generate_ui = subparsers.add_parser(
        "generate-ui", help="Generate a single previewable component"
    )
    generate_ui.add_argument("workflow", help="Path to the workflow JSON file ('-' for stdin)")
    generate_ui.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the component to this file instead of stdout",
    )

    generate_app = subparsers.add_parser(
        "generate-app", help="Generate a complete React project archive"
    )
    generate_app.add_argument("workflow", help="Path to the workflow JSON file ('-' for stdin)")
    generate_app.add_argument(
        "--out",
        type=Path,
        default=Path("."),
        help="Directory to write <project-id>.zip into (default: current directory)",
    )

    publish = subparsers.add_parser(
        "publish", help="Generate a project and deploy it to the hosting provider"
    )
    publish.add_argument("workflow", help="Path to the workflow JSON file ('-' for stdin)")
    publish.add_argument(
        "--no-wait",
        action="store_true",
        help="Return right after submission instead of polling for completion",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = GeneratorConfig()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_INVALID

    config.setup_logging()
    builder = WorkflowAppBuilder(config)

    try:
        raw = _read_workflow(args.workflow)

        if args.command == "analyze":
            summary = builder.analyze(raw)
            print(json.dumps(asdict(summary), indent=2))
            return EXIT_OK

        if args.command == "generate-ui":
            result = builder.preview(raw)
            if not result.code:
                print("Nothing to preview: no component could be extracted", file=sys.stderr)
                return EXIT_FAILED
            if args.out is None:
                print(result.code)
            else:
                args.out.parent.mkdir(parents=True, exist_ok=True)
                args.out.write_text(result.code + "\n", encoding="utf-8")
                print(f"Wrote component to {args.out}")
            return EXIT_OK

        if args.command == "generate-app":
            archive = builder.package(raw)
            args.out.mkdir(parents=True, exist_ok=True)
            target = args.out / archive.filename
            target.write_bytes(archive.data)
            logger.info("Archive written", extra={"path": str(target), "bytes": archive.size})
            print(f"Wrote {target}")
            return EXIT_OK

        if args.command == "publish":
            tree = builder.build_project(raw)
            service = builder.publish_service()
            handle = service.start(tree, builder.hosting_target())
            if args.no_wait:
                handle.cancel()
            try:
                record = handle.result()
            except KeyboardInterrupt:
                handle.cancel()
                record = handle.result()
            if record is None:
                return EXIT_FAILED
            print(record.summary())
            return _exit_code_for(record)

        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_INVALID

    except MalformedWorkflowError as e:
        logger.warning("Workflow rejected", extra={"field": e.field})
        print(f"Invalid workflow: {e}", file=sys.stderr)
        return EXIT_INVALID

    except (OSError, ValueError) as e:
        logger.error("Invalid input or configuration", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return EXIT_INVALID

    except (GenerationError, ArchiveError) as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILED

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILED

    finally:
        builder.close()


if __name__ == "__main__":
    raise SystemExit(main())
