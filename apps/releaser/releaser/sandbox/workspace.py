"""Per-job workspaces.

Each Platform Job gets its own directory so parallel jobs never write to
the same place. The source tree is shared read-only; cargo output goes to
the job's own target directory via CARGO_TARGET_DIR, and downloaded
installers land in the job's downloads directory.

Failed jobs leave their workspace behind for inspection; nothing here
deletes anything.
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobWorkspace:
    """Directories owned by one Platform Job."""

    root: Path
    source_dir: Path

    @property
    def target_dir(self) -> Path:
        return self.root / "target"

    @property
    def downloads_dir(self) -> Path:
        return self.root / "downloads"


def prepare_workspace(
    platform: str,
    source_dir: Path,
    workspace_root: Optional[Path] = None,
) -> JobWorkspace:
    """Create (or reuse) the workspace for one platform.

    If workspace_root is None, a temporary directory is created.
    Re-running against an existing workspace is fine; directories are
    created with exist_ok.
    """
    if workspace_root is None:
        root = Path(tempfile.mkdtemp(prefix=f"releaser-{platform}-"))
    else:
        root = Path(workspace_root) / platform

    workspace = JobWorkspace(root=root.resolve(), source_dir=Path(source_dir).resolve())
    workspace.target_dir.mkdir(parents=True, exist_ok=True)
    workspace.downloads_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Workspace for %s: %s", platform, workspace.root)
    return workspace
