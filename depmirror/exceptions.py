"""Exception hierarchy for depmirror."""

from pathlib import Path


class DepMirrorError(Exception):
    """Base exception for all depmirror errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all depmirror errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(DepMirrorError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Mirror Errors
class MirrorError(DepMirrorError):
    """Mirror registry errors."""

    pass


class MirrorUsageError(MirrorError):
    """Conflicting or incomplete mirror operation requested."""

    pass


class MirrorReadError(MirrorError):
    """Mirror file exists but cannot be read or parsed."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Unable to read mirrors file {path}: {detail}")


class MirrorWriteError(MirrorError):
    """Mirror file cannot be written."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Error writing mirrors file {path}: {detail}")
