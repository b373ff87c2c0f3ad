"""Tooling for declarative release-orchestrator configuration files."""

__version__ = "0.1.0"
