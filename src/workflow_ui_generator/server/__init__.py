"""REST API server for the workflow UI generator."""

from workflow_ui_generator.server.app import create_app

__all__ = ["create_app"]
