import json
import logging
from pathlib import Path
from typing import Optional

from ctxman.errors import ConfigError, ContextError
from ctxman.models import LocalConfig

logger = logging.getLogger(__name__)


class LocalConfigStorage:
    """JSON file storage for the local context config"""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)

    def read(self) -> Optional[LocalConfig]:
        """Load the config, or None if it was never written"""
        try:
            raw = json.loads(self.config_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Config file {self.config_path} is corrupt: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {self.config_path} is corrupt: expected an object")
        try:
            return LocalConfig.from_dict(raw)
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigError(f"Config file {self.config_path} is corrupt: {e!r}") from e

    def write(self, config: LocalConfig):
        """Write the whole config back (owner read/write only)"""
        self.config_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        self.config_path.chmod(0o600)
        logger.debug("Wrote config to %s", self.config_path)

    def delete(self):
        """Remove the config file"""
        self.config_path.unlink()
        logger.debug("Deleted config %s", self.config_path)


def validate_local_config(config: LocalConfig):
    """Raise ConfigError if the config is not internally consistent"""
    seen = set()
    for ref in config.contexts:
        if ref.name in seen:
            raise ConfigError(f"Local config invalid: duplicate context {ref.name}")
        seen.add(ref.name)

    if config.current_context == "":
        return
    try:
        config.resolve_context(config.current_context)
    except ContextError as e:
        raise ConfigError(f"Local config invalid: {e}") from e
