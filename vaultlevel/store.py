"""Durable load/save of the progress state blob."""

import json
import logging
import os
import tempfile
from pathlib import Path

from .models import ProgressState

logger = logging.getLogger(__name__)


class StateStore:
    """JSON file holding the single ProgressState of a vault."""

    def __init__(self, path: Path):
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ProgressState:
        """Load persisted state, falling back to defaults.

        A missing, unreadable or malformed file yields a fresh default state;
        the problem is logged, never raised.
        """
        if not self.path.exists():
            return ProgressState()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return ProgressState.from_dict(data)
        except (OSError, json.JSONDecodeError, ValueError, TypeError) as e:
            logger.warning("Could not load state from %s, using defaults: %s", self.path, e)
            return ProgressState()

    def save(self, state: ProgressState) -> None:
        """Write state atomically (temp file, then replace)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
