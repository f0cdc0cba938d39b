"""Class and constructor-parameter metadata read by the container.

- ``@injectable`` marks a class as eligible for automatic construction.
- ``Annotated[T, Inject(key)]`` on a constructor parameter makes the container
  resolve ``key`` instead of ``T`` for that parameter.
- Constructor parameter keys come from the constructor type hints
  (``__init__``, ``__new__`` or a metaclass ``__call__``).
"""

from __future__ import annotations

import inspect
import logging
import sys
import weakref
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
    overload,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

_injectables: weakref.WeakSet[type] = weakref.WeakSet()


@dataclass(frozen=True)
class Inject:
    """Parameter marker: resolve ``key`` instead of the annotated type.

    Example:
      def __init__(self, url: Annotated[str, Inject(DB_URL)]): ...

    """

    key: Any


@overload
def injectable(cls: type[T]) -> type[T]: ...


@overload
def injectable(cls: None = ...) -> Callable[[type[T]], type[T]]: ...


def injectable(cls: type[T] | None = None) -> type[T] | Callable[[type[T]], type[T]]:
    """Mark a class as eligible for automatic construction.

    Usable both bare (``@injectable``) and called (``@injectable()``).
    The mark applies to the decorated class only, subclasses must be marked themselves.
    """

    def mark(target: type[T]) -> type[T]:
        if not inspect.isclass(target):
            msg = f"@injectable can only decorate classes, got {target!r}"
            raise TypeError(msg)
        _injectables.add(target)
        return target

    if cls is None:
        return mark
    return mark(cls)


def is_injectable(cls: Any) -> bool:
    return inspect.isclass(cls) and cls in _injectables


def get_params(cls: type) -> list[inspect.Parameter]:
    """Constructor parameters of ``cls`` in declaration order, without variadics.

    Follows ``inspect.signature``: a metaclass ``__call__``, then ``__new__``
    or ``__init__``, whichever the MRO defines first.
    """
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError):
        # builtin without signature metadata: nothing to inject
        return []

    return [p for p in sig.parameters.values() if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)]


def get_param_types(cls: type) -> list[Any]:
    hints = _get_constructor_type_hints(cls)
    return [_strip_annotated(hints.get(p.name, object)) for p in get_params(cls)]


def get_param_override(cls: type, index: int) -> Any | None:
    params = get_params(cls)
    if not 0 <= index < len(params):
        return None

    hint = _get_constructor_type_hints(cls).get(params[index].name)
    if get_origin(hint) is not Annotated:
        return None

    for meta in reversed(hint.__metadata__):
        if isinstance(meta, Inject):
            return meta.key
    return None


def _strip_annotated(hint: Any) -> Any:
    if get_origin(hint) is Annotated:
        return get_args(hint)[0]
    return hint


def _constructor_source(cls: type) -> Callable[..., Any] | None:
    """The user-defined callable ``inspect.signature(cls)`` reads parameters from."""
    for meta in type(cls).__mro__:
        if meta is type:
            break
        call = meta.__dict__.get("__call__")
        if inspect.isfunction(call):
            return call

    for base in cls.__mro__:
        if base is object:
            break
        new = base.__dict__.get("__new__")
        if isinstance(new, staticmethod):
            new = new.__func__
        if inspect.isfunction(new):
            return new
        init = base.__dict__.get("__init__")
        if inspect.isfunction(init):
            return init

    return None


def _get_constructor_type_hints(cls: type) -> dict[str, Any]:
    source = _constructor_source(cls)
    if source is None:
        return {}

    try:
        hints = get_type_hints(source, include_extras=True)
    except TypeError:
        hints = {}
    except NameError:
        hints = _get_resolvable_type_hints(cls, source)

    if _is_namedtuple(cls):
        # generated __new__ doesn't see the defining module's globals
        try:
            hints = {**hints, **get_type_hints(cls, include_extras=True)}
        except NameError:
            hints = {**hints, **_get_resolvable_type_hints(cls, cls)}

    hints.pop("return", None)
    return hints


def _get_resolvable_type_hints(cls: type, source: Any) -> dict[str, Any]:
    """Evaluate annotations one by one, leaving out those that can't be resolved."""
    try:
        raw = dict(getattr(source, "__annotations__", {}))
    except NameError as exc:
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        return {}

    globalns = getattr(source, "__globals__", None)
    if globalns is None:
        globalns = vars(sys.modules[cls.__module__]) if cls.__module__ in sys.modules else {}

    hints = {}
    for name, annotation in raw.items():
        if not isinstance(annotation, str):
            hints[name] = annotation
            continue
        try:
            hints[name] = eval(annotation, globalns)  # noqa: S307
        except NameError as exc:
            logger.warning(
                "'%s' name error retrieving %s (%s) type hint for '%s'", exc.name, cls.__name__, cls.__qualname__, name
            )

    return hints


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")
