import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ctxman.errors import ContextError, ContextNotFoundError, LogoutError, NoConfigError
from ctxman.models import ContextRow, LocalConfig
from ctxman.storage.config_storage import LocalConfigStorage, validate_local_config
from ctxman.storage.prev_context_storage import PREV_CONTEXT_FILENAME, PreviousContextStorage

logger = logging.getLogger(__name__)

PREVIOUS_CONTEXT = "-"


@dataclass
class SwitchResult:
    """Outcome of switching contexts"""
    name: str
    previous: str
    switched: bool


class ContextManager:
    """List, switch and delete contexts stored in a local config file.

    Every operation reads the config fresh and, when it changes anything,
    writes it back in full.
    """

    def __init__(self, config_path: Path, marker_path: Optional[Path] = None):
        self.config_path = Path(config_path)
        self.storage = LocalConfigStorage(self.config_path)
        self.prev_context = PreviousContextStorage(
            marker_path or (self.config_path.parent / PREV_CONTEXT_FILENAME)
        )

    def _load(self, missing_message: str) -> LocalConfig:
        config = self.storage.read()
        if config is None:
            raise NoConfigError(missing_message)
        return config

    def list_contexts(self) -> List[ContextRow]:
        """Return one row per stored context, in storage order"""
        config = self._load(f"No contexts defined in {self.config_path}")
        rows = []
        for ref in config.contexts:
            server = ref.server
            try:
                server = config.resolve_context(ref.name).server.server
            except ContextError as e:
                logger.warning("Context '%s' had error: %s", ref.name, e)
            rows.append(ContextRow(
                is_current=(ref.name == config.current_context),
                name=ref.name,
                server=server,
            ))
        return rows

    def switch_to(self, name: str) -> SwitchResult:
        """Make a context current; "-" switches back to the previous one"""
        if not name:
            raise ContextError("context name cannot be empty")
        config = self._load(f"No contexts defined in {self.config_path}")

        if name == PREVIOUS_CONTEXT:
            name = self.prev_context.get()

        if config.current_context == name:
            logger.debug("Already at context '%s', nothing to write", name)
            return SwitchResult(name=name, previous=name, switched=False)

        config.resolve_context(name)

        previous = config.current_context
        config.current_context = name
        # Two separate writes; a failure in between only leaves the marker stale.
        self.storage.write(config)
        self.prev_context.set(previous)
        return SwitchResult(name=name, previous=previous, switched=True)

    def delete(self, name: str) -> str:
        """Delete a context together with the server and user it named.

        The user keyed by the context name and the context's server are
        removed even if another context still references them.
        """
        config = self._load("nothing to logout from")

        server_key, found = config.remove_context(name)
        if not found:
            raise ContextNotFoundError(name)
        # TODO: skip records still referenced by another context once shared servers are supported
        config.remove_user(name)
        config.remove_server(server_key)

        if config.is_empty():
            self.storage.delete()
            return name

        if config.current_context == name:
            config.current_context = ""
        try:
            validate_local_config(config)
        except ContextError as e:
            raise LogoutError("Error in logging out") from e
        self.storage.write(config)
        return name
