"""
Process-wide configuration for hypernum.

Core algorithms never read the active configuration themselves: the public
entry points (constructors, parsers, serializers) take an optional `config`
argument and resolve the process default once, at the boundary.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SerializationMode(Enum):
    """Which text `serialize()` produces."""

    STRUCTURED = "structured"
    TEXT = "text"


class DebugLevel(Enum):
    """Verbosity of the `hypernum` logger."""

    NONE = "none"
    INFO = "info"
    DEBUG = "debug"


_LOG_LEVELS = {
    DebugLevel.NONE: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
}


@dataclass(frozen=True)
class Configuration:
    """
    Settings record passed to constructors and serializers.

    Properties:
        max_terms:
            Cap on the number of terms kept after normalization.
            When exceeded, the lowest operators are dropped.

        serialization_mode:
            STRUCTURED (JSON) or TEXT (tower notation)

        debug_level:
            Verbosity applied to the `hypernum` logger by `configure()`
    """

    max_terms: int = 1000
    serialization_mode: SerializationMode = SerializationMode.STRUCTURED
    debug_level: DebugLevel = DebugLevel.NONE

    def __post_init__(self):
        if isinstance(self.max_terms, bool) or not isinstance(self.max_terms, int) or self.max_terms < 1:
            raise ValueError(f"max_terms must be a positive integer, got {self.max_terms!r}")
        if not isinstance(self.serialization_mode, SerializationMode):
            raise ValueError(f"Unsupported serialization mode: {self.serialization_mode!r}")
        if not isinstance(self.debug_level, DebugLevel):
            raise ValueError(f"Unsupported debug level: {self.debug_level!r}")


DEFAULT_CONFIGURATION = Configuration()

_active = DEFAULT_CONFIGURATION


def configure(config: Configuration) -> None:
    """Replace the process-wide configuration wholesale."""
    global _active
    if not isinstance(config, Configuration):
        raise ValueError(f"Expected a Configuration, got {type(config).__name__}")
    _active = config
    logging.getLogger("hypernum").setLevel(_LOG_LEVELS[config.debug_level])


def get_configuration() -> Configuration:
    return _active


def resolve_configuration(config: Optional[Configuration] = None) -> Configuration:
    """Return `config`, or the process-wide configuration when it is None."""
    if config is None:
        return _active
    return config
