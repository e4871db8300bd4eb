"""Compiler Invoker: release builds and Cargo manifest reading."""

from releaser.build.cargo import detect_binary_name, parse_cargo
from releaser.build.compiler import (
    Artifact,
    BuildPlan,
    build_release,
    plan_build,
    resolve_binary_name,
)

__all__ = [
    "Artifact",
    "BuildPlan",
    "build_release",
    "detect_binary_name",
    "parse_cargo",
    "plan_build",
    "resolve_binary_name",
]
