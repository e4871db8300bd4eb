"""Sandbox module: per-job workspaces."""

from releaser.sandbox.workspace import JobWorkspace, prepare_workspace

__all__ = ["JobWorkspace", "prepare_workspace"]
