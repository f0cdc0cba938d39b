import logging
from dataclasses import dataclass
from typing import Annotated, NamedTuple

import pytest

from plaininject import Inject, InjectionToken, get_param_override, get_param_types, injectable, is_injectable


TOKEN = InjectionToken("token")


@injectable
class InjectableClass: ...


@injectable()
class CalledDecoratorClass: ...


class StandardClass: ...


class Dependency: ...


@injectable
class WithParams:
    def __init__(self, dep: Dependency, value: Annotated[str, Inject(TOKEN)], *args, untyped, **kwargs):
        self.dep = dep


@injectable
class UnresolvableHint:
    def __init__(self, thing: "DoesNotExist"):  # noqa: F821
        self.thing = thing


@injectable
class PartlyUnresolvable:
    def __init__(self, dep: "Dependency", value: "Annotated[str, Inject(TOKEN)]", thing: "DoesNotExist"):  # noqa: F821
        self.dep = dep


@injectable
class Coordinates(NamedTuple):
    dep: Dependency
    value: Annotated[str, Inject(TOKEN)]


def test_is_injectable_recognises_injectable_class():
    assert is_injectable(InjectableClass)
    assert is_injectable(CalledDecoratorClass)


def test_is_injectable_recognises_non_injectable_class():
    assert not is_injectable(StandardClass)


def test_is_injectable_is_not_inherited():
    class Child(InjectableClass): ...

    assert not is_injectable(Child)


def test_is_injectable_rejects_non_classes():
    assert not is_injectable(TOKEN)
    assert not is_injectable("InjectableClass")


def test_injectable_decorator_rejects_functions():
    with pytest.raises(TypeError):
        injectable(lambda: None)


def test_get_param_types_in_declaration_order():
    assert get_param_types(WithParams) == [Dependency, str, object]


def test_get_param_types_of_class_without_init():
    assert get_param_types(InjectableClass) == []


def test_get_param_types_of_dataclass():
    @dataclass
    class Settings:
        dep: Dependency
        name: str = "x"

    assert get_param_types(Settings) == [Dependency, str]


def test_get_param_types_uses_inherited_init():
    class Child(WithParams): ...

    assert get_param_types(Child) == [Dependency, str, object]


def test_get_param_override():
    assert get_param_override(WithParams, 0) is None
    assert get_param_override(WithParams, 1) is TOKEN
    assert get_param_override(WithParams, 2) is None
    assert get_param_override(WithParams, 3) is None


def test_get_param_override_uses_last_marker():
    other = InjectionToken("other")

    class Twice:
        def __init__(self, value: Annotated[str, Inject(TOKEN), Inject(other)]):
            self.value = value

    assert get_param_override(Twice, 0) is other


def test_unresolvable_hint_falls_back_to_object_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="plaininject._metadata"):
        assert get_param_types(UnresolvableHint) == [object]

    assert "DoesNotExist" in caplog.text


def test_unresolvable_hint_keeps_resolvable_params(caplog):
    with caplog.at_level(logging.WARNING, logger="plaininject._metadata"):
        assert get_param_types(PartlyUnresolvable) == [Dependency, str, object]
        assert get_param_override(PartlyUnresolvable, 1) is TOKEN

    assert "'thing'" in caplog.text


def test_get_param_types_of_namedtuple():
    assert get_param_types(Coordinates) == [Dependency, str]
    assert get_param_override(Coordinates, 1) is TOKEN


def test_get_param_types_of_class_with_new():
    class Built:
        def __new__(cls, dep: Dependency, *, name: str):
            return super().__new__(cls)

    assert get_param_types(Built) == [Dependency, str]
