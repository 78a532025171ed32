"""Console entrypoint shim; the CLI lives in `workflow_ui_generator.pipeline.main`."""

from __future__ import annotations

from workflow_ui_generator.pipeline.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
