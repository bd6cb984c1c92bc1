"""
Introspection

This module builds TypeDescriptor tables from Python classes. It is the
only place that inspects signatures and annotations; the activation core
works exclusively with the descriptors produced here.

A class exposes:
- ``__init__`` as its primary constructor
- any classmethod decorated with ``@constructor`` as an alternate constructor
- every ``property`` with a setter as a settable property

Example::

    class Clock:
        def __init__(self, tz: tzinfo):
            self.tz = tz

        @constructor
        def utc(cls) -> 'Clock':
            return cls(timezone.utc)

    descriptor = describe_type(Clock)
    [c.name for c in descriptor.constructors]  # ['Clock.__init__', 'Clock.utc']
"""

import inspect
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .descriptors import (
    ConstructorCandidate,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from .exceptions import ConfigurationError

CONSTRUCTOR_MARKER = '__bindwire_constructor__'

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def constructor(func: Callable) -> classmethod:
    """Mark a function (or classmethod) as an alternate constructor.

    The decorated function is exposed as a classmethod and discovered by
    the default constructor finder after ``__init__``.
    """
    if isinstance(func, classmethod):
        func = func.__func__
    setattr(func, CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def is_constructor(member: Any) -> bool:
    return isinstance(member, classmethod) and getattr(member.__func__, CONSTRUCTOR_MARKER, False)


def describe_type(implementation_type: type) -> TypeDescriptor:
    """Build the TypeDescriptor for a class.

    Nothing is cached here; callers that describe a type repeatedly keep
    their own table for as long as they need it.

    Args:
        implementation_type: The concrete class to describe

    Returns:
        TypeDescriptor with constructors in discovery order and settable
        properties in stable MRO order

    Raises:
        ConfigurationError: When the argument is not a class, or a
            constructor annotation cannot be resolved
    """
    if not isinstance(implementation_type, type):
        raise ConfigurationError(
            f"Cannot describe {implementation_type!r}: expected a class."
        )

    constructors: List[ConstructorCandidate] = [_describe_init(implementation_type)]
    for name, member in _iter_class_members(implementation_type):
        if is_constructor(member):
            constructors.append(
                _describe_alternate(implementation_type, name, member, len(constructors))
            )

    properties = tuple(
        _describe_property(implementation_type, name, member)
        for name, member in _iter_class_members(implementation_type)
        if isinstance(member, property) and member.fset is not None
    )

    return TypeDescriptor(implementation_type, tuple(constructors), properties)


def _iter_class_members(cls: type):
    """Yield (name, member) pairs walking the MRO, most-derived first.

    A name shadowed by a subclass is only yielded once.
    """
    seen = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            yield name, member


def _describe_init(cls: type) -> ConstructorCandidate:
    init = cls.__init__
    member = f"{cls.__name__}.__init__"
    try:
        sig = inspect.signature(init)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"Cannot inspect {member}: {e}. "
            f"This may occur with built-in types or C extension classes."
        ) from e

    # Drop 'self'
    parameters = list(sig.parameters.values())[1:]
    descriptors = _describe_parameters(cls, init, parameters, member)
    return ConstructorCandidate(member, descriptors, cls, 0)


def _describe_alternate(cls: type, name: str, member: classmethod, position: int) -> ConstructorCandidate:
    func = member.__func__
    display = f"{cls.__name__}.{name}"
    # Drop 'cls'
    parameters = list(inspect.signature(func).parameters.values())[1:]
    descriptors = _describe_parameters(cls, func, parameters, display)
    return ConstructorCandidate(display, descriptors, getattr(cls, name), position)


def _describe_property(cls: type, name: str, prop: property) -> PropertyDescriptor:
    setter = prop.fset
    parameters = list(inspect.signature(setter).parameters.values())[1:2]
    if not parameters:
        raise ConfigurationError(
            f"Property setter {cls.__name__}.{name} takes no value parameter."
        )
    (descriptor,) = _describe_parameters(cls, setter, parameters, name)

    # Fall back to the getter's return annotation for unannotated setters
    if descriptor.parameter_type is inspect.Parameter.empty and prop.fget is not None:
        returns = _resolve_type_hints(prop.fget).get('return', inspect.Parameter.empty)
        descriptor = ParameterDescriptor(
            descriptor.name, returns, 0, member=name,
        )
    return PropertyDescriptor(name, descriptor)


def _describe_parameters(
    cls: type,
    func: Callable,
    parameters: List[inspect.Parameter],
    member: str,
) -> Tuple[ParameterDescriptor, ...]:
    hints = _resolve_type_hints(func)
    descriptors = []
    for param in parameters:
        # Skip *args and **kwargs
        if param.kind in _VARIADIC:
            continue

        param_type = hints.get(param.name, param.annotation)
        if isinstance(param_type, str):
            param_type = _resolve_string_annotation(cls, member, param.name, param_type)

        has_default = param.default is not inspect.Parameter.empty
        descriptors.append(ParameterDescriptor(
            name=param.name,
            parameter_type=param_type,
            position=len(descriptors),
            has_default=has_default,
            default=param.default if has_default else None,
            keyword_only=param.kind == inspect.Parameter.KEYWORD_ONLY,
            member=member,
        ))
    return tuple(descriptors)


def _resolve_type_hints(func: Callable) -> Dict[str, Any]:
    """Resolve type hints with typing.get_type_hints(), or {} when that fails.

    Failures fall back to per-parameter string resolution.
    """
    try:
        return typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError, RecursionError):
        return {}


def _resolve_string_annotation(cls: type, member: str, param_name: str, annotation: str) -> Any:
    """Evaluate a forward reference in the namespace of the class's module."""
    module = inspect.getmodule(cls)
    namespace: Dict[str, Any] = {'Union': Union, 'Optional': Optional}
    if module is not None:
        namespace.update(vars(module))
    namespace.update(vars(cls))
    namespace.setdefault(cls.__name__, cls)

    try:
        return eval(annotation, namespace)
    except NameError as e:
        raise ConfigurationError(
            f"Cannot resolve forward reference '{annotation}' for parameter "
            f"'{param_name}' in {member}. "
            f"Hint: Ensure '{annotation}' is defined and imported in the module "
            f"that declares {cls.__name__}."
        ) from e
    except SyntaxError as e:
        raise ConfigurationError(
            f"Invalid forward reference '{annotation}' for parameter "
            f"'{param_name}' in {member}: {e}."
        ) from e
