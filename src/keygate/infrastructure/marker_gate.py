"""Marker path gate - decides whether the readiness check is required"""

import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class MarkerGate:
    """Gate based on the presence of prefixed entries in a directory"""

    def __init__(self, path: Union[str, Path], prefix: str = "executionPlan-"):
        """Initialize marker gate

        Args:
            path: Marker directory (usually a mounted ConfigMap)
            prefix: File name prefix that makes the check required
        """
        if not prefix:
            raise ValueError("prefix must be a non-empty string")
        self.path = Path(path)
        self.prefix = prefix

    def matching_entries(self) -> List[Path]:
        """List top-level entries whose name starts with the prefix

        Returns:
            Sorted list of matching paths (empty if the path is not a
            directory or cannot be listed)
        """
        if not self.path.is_dir():
            return []
        try:
            return sorted(p for p in self.path.iterdir() if p.name.startswith(self.prefix))
        except OSError as e:
            logger.warning(f"Cannot list marker directory '{self.path}': {e}")
            return []

    def is_required(self) -> tuple[bool, str]:
        """Check if the readiness check must run

        Returns:
            Tuple of (required, reason)
        """
        if not self.path.exists():
            return False, f"Cluster config not present at '{self.path}'"

        entries = self.matching_entries()
        if not entries:
            return False, f"No '{self.prefix}' files found under '{self.path}'"

        logger.info(f"Marker entries: {', '.join(p.name for p in entries)}")
        return True, f"Found '{self.prefix}' file(s) in '{self.path}'"
