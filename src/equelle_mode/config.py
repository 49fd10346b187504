"""ContextVar-based mode configuration for equelle_mode.

Holds the host-editor settings the tokenizer and the indentation tracker
read: indent unit, tab size, continuation marker, alignment offset.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from equelle_mode.config import ModeConfig, mode_config_context

    with mode_config_context(ModeConfig(indent_unit=4)):
        html = highlight(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from equelle_mode.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ModeConfig:
    """Immutable mode configuration.

    Attributes:
        indent_unit: Columns added per block level (host editor setting)
        function_anchor_offset: Offset added to a Function token's column to
            anchor continuation lines; the width of the ``Function`` keyword
        tab_size: Tab stop width used for columns and indentation
        continuation_marker: Literal that starts a line continuation
        block_close_marker: Literal that closes a block; a line starting with
            it is dedented by ``query_indent``
        strict_blocks: Issue a StructuralUnderflow warning when a block close
            arrives with no open block

    """

    indent_unit: int = 2
    function_anchor_offset: int = 8
    tab_size: int = 4
    continuation_marker: str = "..."
    block_close_marker: str = "}"
    strict_blocks: bool = False

    def __post_init__(self) -> None:
        if self.indent_unit < 0:
            raise ConfigError(f"indent_unit must be >= 0, got {self.indent_unit}")
        if self.tab_size < 1:
            raise ConfigError(f"tab_size must be >= 1, got {self.tab_size}")
        if not self.continuation_marker:
            raise ConfigError("continuation_marker must not be empty")
        if not self.block_close_marker:
            raise ConfigError("block_close_marker must not be empty")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ModeConfig":
        """Create ModeConfig from dictionary.

        Useful when settings come from the host editor. Unknown keys are
        ignored.

        Example:
            >>> config = ModeConfig.from_dict({"indent_unit": 4, "theme": "dark"})
            >>> config.indent_unit
            4

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ModeConfig = ModeConfig()

_mode_config: ContextVar[ModeConfig] = ContextVar(
    "mode_config",
    default=_DEFAULT_CONFIG,
)


def get_mode_config() -> ModeConfig:
    """Get current mode configuration (thread-local)."""
    return _mode_config.get()


def set_mode_config(config: ModeConfig) -> None:
    """Set mode configuration for current context.

    Args:
        config: ModeConfig instance to use for this context.

    """
    _mode_config.set(config)


def reset_mode_config() -> None:
    """Reset to default configuration."""
    _mode_config.set(_DEFAULT_CONFIG)


@contextmanager
def mode_config_context(config: ModeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with mode_config_context(ModeConfig(indent_unit=4)):
        ...     get_mode_config().indent_unit
        4

    """
    previous = _mode_config.get()
    _mode_config.set(config)
    try:
        yield
    finally:
        _mode_config.set(previous)


__all__ = [
    "ModeConfig",
    "get_mode_config",
    "set_mode_config",
    "reset_mode_config",
    "mode_config_context",
]
