"""Release binary matrix: bootstrap, build and publish per platform."""

__version__ = "0.1.0"
