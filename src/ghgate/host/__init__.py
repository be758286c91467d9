"""Host command dispatch."""

from ghgate.host.dispatch import (
    CommandDispatcher,
    CommandRegistry,
    build_default_registry,
    run_login,
)

__all__ = [
    "CommandDispatcher",
    "CommandRegistry",
    "build_default_registry",
    "run_login",
]
