"""Keleustes GitOps delivery control plane: scaffold reconcilers, sync phase mapping and observability conventions."""

__version__ = "0.1.0"