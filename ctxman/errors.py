class ContextError(Exception):
    """Base class for context management errors"""


class NoConfigError(ContextError):
    """No local config exists where one is required"""


class ContextNotFoundError(ContextError):
    """A context name does not match any stored context"""

    def __init__(self, name: str):
        super().__init__(f"Context {name} does not exist")
        self.name = name


class ResolutionError(ContextError):
    """A context points to a server or user record that is missing"""


class NoPreviousContextError(ContextError):
    """There is no previous context to switch back to"""


class ConfigError(ContextError):
    """The local config is corrupt or fails validation"""


class LogoutError(ContextError):
    """The config left after removing a context is not valid"""
