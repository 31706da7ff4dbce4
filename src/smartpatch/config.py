"""ContextVar-based patch configuration for smartpatch.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The matcher and the high-level API read the active config; callers set it
once per run or scope it with a context manager.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from smartpatch.config import PatchConfig, patch_config_context

    with patch_config_context(PatchConfig(max_steps=10_000)):
        result = apply_patch(source, match_text, patch_text)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PatchConfig:
    """Immutable patch configuration.

    Attributes:
        max_steps: Ceiling on matcher search steps before SearchLimitExceeded
        max_wildcards: Ceiling on wildcards per pattern (bounds recursion depth)
        relative_depth: Compare nesting depth relative to the first matched
            literal instead of absolutely
        tokenizer: Name of the source token provider ("builtin" or "tree-sitter")

    """

    max_steps: int = 100_000
    max_wildcards: int = 256
    relative_depth: bool = False
    tokenizer: str = "builtin"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PatchConfig":
        """Create PatchConfig from dictionary.

        Only includes keys that are valid PatchConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = PatchConfig.from_dict({"max_steps": 500, "color": "red"})
            >>> config.max_steps
            500

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: PatchConfig = PatchConfig()

_patch_config: ContextVar[PatchConfig] = ContextVar(
    "patch_config",
    default=_DEFAULT_CONFIG,
)


def get_patch_config() -> PatchConfig:
    """Get current patch configuration (thread-local)."""
    return _patch_config.get()


def set_patch_config(config: PatchConfig) -> None:
    """Set patch configuration for current context.

    Args:
        config: PatchConfig instance to use for this context.

    """
    _patch_config.set(config)


def reset_patch_config() -> None:
    """Reset to the default configuration."""
    _patch_config.set(_DEFAULT_CONFIG)


@contextmanager
def patch_config_context(config: PatchConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with patch_config_context(PatchConfig(relative_depth=True)):
        ...     get_patch_config().relative_depth
        True

    """
    previous = _patch_config.get()
    _patch_config.set(config)
    try:
        yield
    finally:
        _patch_config.set(previous)


__all__ = [
    "PatchConfig",
    "get_patch_config",
    "patch_config_context",
    "reset_patch_config",
    "set_patch_config",
]
