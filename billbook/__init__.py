"""billbook - small-business billing backend."""

__version__ = "1.0.0"
