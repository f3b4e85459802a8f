"""code-snippets: syntax highlighting and heuristic function extraction."""

__version__ = "0.1.0"
