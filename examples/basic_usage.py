#!/usr/bin/env python3
"""Programmatic project generation example.

* load settings from `.env`
* generate a React project for a workflow file
* write `<project-id>.zip` next to it
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from workflow_ui_generator.core.builder import WorkflowAppBuilder
from workflow_ui_generator.core.config import GeneratorConfig
from workflow_ui_generator.pipeline.errors import GenerationError, MalformedWorkflowError


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a React project archive for a workflow.")
    parser.add_argument("workflow", type=Path, help="Path to an n8n workflow JSON export")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    config = GeneratorConfig()
    config.setup_logging()
    builder = WorkflowAppBuilder(config)

    try:
        archive = builder.package(args.workflow.read_text(encoding="utf-8"))
    except (MalformedWorkflowError, GenerationError) as exc:
        print(str(exc))
        return 1
    finally:
        builder.close()

    target = args.workflow.with_name(archive.filename)
    target.write_bytes(archive.data)
    print(f"Wrote {target} ({archive.size} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
