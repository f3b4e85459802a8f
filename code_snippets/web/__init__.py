"""HTTP API for the snippet manager front end."""

from code_snippets.web.app import create_app

__all__ = ["create_app"]
