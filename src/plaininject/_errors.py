from __future__ import annotations

from typing import Any

from ._keys import display_name


class InjectionError(RuntimeError):
    """Base class for every error raised by the container."""


class NotInjectableError(InjectionError):
    """Raised by ``add_provider`` when a class provider's implementation isn't injectable."""

    def __init__(self, provide: Any, use_class: Any) -> None:
        self.provide = provide
        self.use_class = use_class
        cls_name = display_name(use_class)
        super().__init__(f"Cannot provide {display_name(provide)} using class {cls_name}, {cls_name} isn't injectable")


class NoProviderError(InjectionError):
    """Raised when a key has no provider and can't be default-constructed."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"No provider for type {display_name(key)}")


class CircularDependencyError(InjectionError):
    """Raised when a constructor parameter re-requests a key that is still being resolved.

    ``cls`` and ``index`` identify the class where the cycle starts and the
    parameter through which it was entered; ``path`` lists the keys that were
    being resolved when the cycle was detected.
    """

    def __init__(self, cls: type, index: int, path: tuple[Any, ...] = ()) -> None:
        self.cls = cls
        self.index = index
        self.path = path
        super().__init__(
            f"Injection error. Recursive dependency detected in constructor for type {display_name(cls)} "
            f"with parameter at index {index}"
        )
