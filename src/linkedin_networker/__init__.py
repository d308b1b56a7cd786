# ABOUTME: Main package initialization for the LinkedIn networker CLI tool.
# ABOUTME: Exports version information from pyproject.toml.

from importlib.metadata import version

__version__ = version("linkedin-networker")
