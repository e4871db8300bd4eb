"""Cargo.toml reading for the binary name.

Uses stdlib tomllib (Python 3.11+). The first `[[bin]]` target wins;
otherwise the package name is the binary name, as cargo itself does.
"""

import logging
import tomllib
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def parse_cargo(source_dir: Path) -> dict:
    """Parse Cargo.toml and return the raw dict ({} if absent or invalid)."""
    path = Path(source_dir) / "Cargo.toml"
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.error("Failed to parse Cargo.toml: %s", exc)
        return {}


def detect_binary_name(source_dir: Path) -> Optional[str]:
    """Return the name of the binary `cargo build` produces, or None."""
    data = parse_cargo(source_dir)
    if not data:
        return None

    for target in data.get("bin", []):
        name = target.get("name")
        if name:
            return name

    name = data.get("package", {}).get("name")
    return name or None
