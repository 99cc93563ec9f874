"""pydepsync — keep pyproject.toml dependencies in sync with what the code imports."""

__version__ = "0.3.0"
