import logging
from pathlib import Path

from ctxman.errors import NoPreviousContextError

logger = logging.getLogger(__name__)

PREV_CONTEXT_FILENAME = ".prev-ctx"


class PreviousContextStorage:
    """Single-value file remembering the context used before the last switch"""

    def __init__(self, marker_path: Path):
        self.marker_path = Path(marker_path)

    def get(self) -> str:
        try:
            return self.marker_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NoPreviousContextError(f"No previous context: {e}") from e

    def set(self, name: str):
        self.marker_path.parent.mkdir(parents=True, exist_ok=True)
        self.marker_path.write_text(name, encoding="utf-8")
        logger.debug("Recorded previous context '%s'", name)

    def __repr__(self):
        return f"<PreviousContextStorage path={self.marker_path}>"
