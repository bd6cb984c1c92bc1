"""
Descriptors

Immutable data classes describing the constructors and settable
properties of an implementation type
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, Tuple


@dataclass(frozen=True)
class ParameterDescriptor:
    """Static shape of one constructor (or property setter) parameter"""
    name: str
    parameter_type: Any
    position: int
    has_default: bool = False
    default: Any = None
    keyword_only: bool = False
    member: str = ""  # Display name of the owning constructor or property

    @property
    def type_name(self) -> str:
        if self.parameter_type is inspect.Parameter.empty:
            return "<unannotated>"
        return getattr(self.parameter_type, '__name__', str(self.parameter_type))


@dataclass(frozen=True)
class PropertyDescriptor:
    """A settable property, described by its setter's parameter"""
    name: str
    setter_parameter: ParameterDescriptor

    def set_value(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass(frozen=True)
class ConstructorCandidate:
    """A constructor: ordered parameter descriptors plus an invocation handle.

    Attributes:
        name: Display name, e.g. ``Service.__init__`` or ``Clock.utc``
        parameters: Parameter descriptors in declared order
        invoker: Callable that creates the instance
        position: Discovery order among the type's candidates
    """
    name: str
    parameters: Tuple[ParameterDescriptor, ...]
    invoker: Callable[..., Any] = field(compare=False)
    position: int = 0

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    @property
    def signature(self) -> str:
        args = ", ".join(f"{p.name}: {p.type_name}" for p in self.parameters)
        return f"{self.name}({args})"

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the constructor with one value per parameter, in declared order."""
        positional = []
        keywords = {}
        for descriptor, value in zip(self.parameters, args):
            if descriptor.keyword_only:
                keywords[descriptor.name] = value
            else:
                positional.append(value)
        return self.invoker(*positional, **keywords)


@dataclass(frozen=True)
class TypeDescriptor:
    """Constructor and property tables for one implementation type.

    Built once by the introspection collaborator; the activation core only
    ever indexes into these tables.
    """
    implementation_type: type
    constructors: Tuple[ConstructorCandidate, ...]
    properties: Tuple[PropertyDescriptor, ...] = ()

    @property
    def name(self) -> str:
        return getattr(self.implementation_type, '__name__', str(self.implementation_type))
