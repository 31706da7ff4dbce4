"""Source token providers for smartpatch.

Providers tokenize the target file for the matcher:
- builtin: the snippet lexer in source mode (default, zero dependencies)
- tree-sitter: C++ leaves from tree-sitter-cpp (pip install smartpatch[cpp])

Usage:
    >>> from smartpatch.providers import get_token_provider
    >>> provider = get_token_provider("builtin")
    >>> [t.text for t in provider.tokenize("f(x);")]
    ['f', '(', 'x', ')', ';']

Thread Safety:
Providers are stateless. A new instance is returned per lookup.

"""

from __future__ import annotations

from collections.abc import Callable

from smartpatch.providers.protocol import TokenProvider

__all__ = [
    "BUILTIN_PROVIDERS",
    "TokenProvider",
    "available_providers",
    "get_token_provider",
    "register_provider",
]

# Registry of provider classes by name
BUILTIN_PROVIDERS: dict[str, type[TokenProvider]] = {}


def register_provider(
    name: str,
) -> Callable[[type[TokenProvider]], type[TokenProvider]]:
    """Decorator to register a token provider.

    Usage:
        @register_provider("builtin")
        class BuiltinTokenProvider:
                ...

    """

    def decorator(cls: type[TokenProvider]) -> type[TokenProvider]:
        BUILTIN_PROVIDERS[name] = cls
        return cls

    return decorator


def get_token_provider(name: str) -> TokenProvider:
    """Get a provider instance by name.

    Raises:
        KeyError: If provider name is not recognized
        ImportError: If the provider's optional dependencies are missing

    """
    if name not in BUILTIN_PROVIDERS:
        available = ", ".join(available_providers())
        raise KeyError(f"Unknown tokenizer: {name!r}. Available: {available}")
    return BUILTIN_PROVIDERS[name]()


def available_providers() -> list[str]:
    return sorted(BUILTIN_PROVIDERS)


# Import built-in providers to register them
from smartpatch.providers.builtin import BuiltinTokenProvider  # noqa: E402
from smartpatch.providers.treesitter import TreeSitterTokenProvider  # noqa: E402

__all__ += ["BuiltinTokenProvider", "TreeSitterTokenProvider"]
