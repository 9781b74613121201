"""ContextVar-based render configuration for Milky.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An explicit config passed to ArticleRenderer wins over the context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from milky.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(asset_prefix="")):
        article = render_article(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        source_language: Fence language tag that enables Rust highlighting
            (case-sensitive)
        asset_prefix: Prefix joined to image destinations in ``src``
            attributes; pages live one directory below the assets
        link_target: ``target`` attribute of rendered links
        inline_code_class: CSS class of inline code spans

    """

    source_language: str = "rust"
    asset_prefix: str = "../"
    link_target: str = "_blank"
    inline_code_class: str = "inline"

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "asset_prefix": "/static/",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.asset_prefix
            '/static/'

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(link_target="_self")):
        ...     get_render_config().link_target
        '_self'

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "reset_render_config",
    "set_render_config",
    "render_config_context",
]
