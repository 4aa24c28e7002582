"""Process-wide registry of game factories, keyed by name."""

from __future__ import annotations

import threading
from typing import Any, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class _Patcher(Protocol):
    def patch(self) -> None:
        ...


@runtime_checkable
class _Factory(Protocol):
    def is_rom_supported(self, rom: Any) -> bool:
        ...

    def can_play(self, rom: Any) -> Tuple[bool, str]:
        ...

    def patcher(self, rom: Any) -> _Patcher:
        ...

    def new_game(self, rom: Any) -> Any:
        ...


_lock = threading.RLock()
_factories: dict[str, Any] = {}


def register(name: str, factory: Any) -> None:
    """Make ``factory`` available under ``name``.

    Raises TypeError if ``factory`` is None and ValueError if ``name`` is
    already registered.
    """
    if factory is None:
        raise TypeError("factory: register factory is None")
    with _lock:
        if name in _factories:
            raise ValueError(f"factory: register called twice for factory {name}")
        _factories[name] = factory


def unregister_all() -> None:
    """Forget every registered factory."""
    with _lock:
        _factories.clear()


def factories() -> list[Any]:
    """Return the registered factories."""
    with _lock:
        return list(_factories.values())


def factory_names() -> list[str]:
    """Return the sorted names of the registered factories."""
    with _lock:
        return sorted(_factories)


def factory_by_name(name: str) -> Optional[Any]:
    """Return the factory registered under ``name``, or None."""
    with _lock:
        return _factories.get(name)