from __future__ import annotations

import inspect
from typing import Any, Generic, TypeVar


T = TypeVar("T")


class InjectionToken(Generic[T]):
    """Symbolic resolution key for values that have no class of their own.

    Tokens compare by identity, two tokens with the same label are distinct keys.

    Example:
      DB_URL = InjectionToken[str]("db-url")
      container.add_provider(ValueProvider(DB_URL, "sqlite://"))

    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"InjectionToken({self._name!r})"


def is_type_key(key: Any) -> bool:
    return inspect.isclass(key)


def display_name(key: Any) -> str:
    if isinstance(key, InjectionToken):
        return key.name
    return getattr(key, "__name__", None) or repr(key)
