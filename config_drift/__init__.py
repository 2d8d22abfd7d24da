"""Configuration drift detection for property files in a git repository."""

__version__ = "1.0.0"
