"""Create and render changelog entries kept as individual YAML files."""

__version__ = "0.1.0"