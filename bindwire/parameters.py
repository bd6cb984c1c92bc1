"""
Parameters

Parameter sources supply values for constructor parameters and property
setters. Each source is asked, for one ParameterDescriptor, whether it can
supply a value; it answers with the tagged result ``DECLINED`` or
``Supplied(factory)``. The factory is a DeferredValue, computed only when
the winning constructor is instantiated.

Sources are composed into a ParameterChain. For activation the chain is
always, in this order:

1. caller-supplied parameters (first match in supplied order wins)
2. parameters configured on the registration
3. AutowiringParameter (resolve the declared type from the context)
4. DefaultValueParameter (the declared default of an optional parameter)

Example::

    container.resolve(
        Thing,
        NamedParameter("x", 5),
        TypedParameter(Clock, FrozenClock()),
    )
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple, Union

from .context import ComponentContext
from .deferred import DeferredValue
from .descriptors import ParameterDescriptor


class Declined:
    """Result of a source that cannot supply a value"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Declined"


DECLINED = Declined()


@dataclass(frozen=True)
class Supplied:
    """Result of a source that can supply a value, carrying its deferred factory"""
    factory: DeferredValue


SourceResult = Union[Supplied, Declined]


class Parameter(ABC):
    """A source of values for parameters"""

    @abstractmethod
    def can_supply_value(
        self,
        descriptor: ParameterDescriptor,
        context: Optional[ComponentContext],
    ) -> SourceResult:
        """Decide whether this source supplies the parameter.

        Must not compute the value; only return the factory that will.

        Args:
            descriptor: The parameter to supply
            context: Context to resolve dependencies from (may be None)

        Returns:
            ``Supplied(factory)`` or ``DECLINED``
        """
        pass


class ConstantParameter(Parameter):
    """Base class for sources carrying a fixed value and a matching predicate"""

    def __init__(self, value: Any, predicate: Callable[[ParameterDescriptor], bool]):
        self.value = value
        self._predicate = predicate

    def can_supply_value(self, descriptor, context):
        if self._predicate(descriptor):
            return Supplied(DeferredValue.computed(self.value))
        return DECLINED


class NamedParameter(ConstantParameter):
    """Supplies a value to the parameter with a given name"""

    def __init__(self, name: str, value: Any):
        if not name:
            raise ValueError("Parameter name must be a non-empty string")
        self.name = name
        super().__init__(value, lambda d: d.name == name)

    def __repr__(self) -> str:
        return f"NamedParameter({self.name!r}, {self.value!r})"


class PositionalParameter(ConstantParameter):
    """Supplies a value to the parameter at a given (zero-based) position"""

    def __init__(self, position: int, value: Any):
        if position < 0:
            raise ValueError(f"Parameter position must be >= 0, got {position}")
        self.position = position
        super().__init__(value, lambda d: d.position == position)

    def __repr__(self) -> str:
        return f"PositionalParameter({self.position}, {self.value!r})"


class TypedParameter(ConstantParameter):
    """Supplies a value to parameters (or setters) declared with a given type"""

    def __init__(self, parameter_type: Any, value: Any):
        self.parameter_type = parameter_type
        super().__init__(value, lambda d: d.parameter_type == parameter_type)

    @classmethod
    def from_value(cls, value: Any) -> 'TypedParameter':
        return cls(type(value), value)

    def __repr__(self) -> str:
        name = getattr(self.parameter_type, '__name__', self.parameter_type)
        return f"TypedParameter({name}, {self.value!r})"


class NamedPropertyParameter(ConstantParameter):
    """Supplies a value to the setter of the property with a given name"""

    def __init__(self, name: str, value: Any):
        if not name:
            raise ValueError("Property name must be a non-empty string")
        self.name = name
        super().__init__(value, lambda d: d.member == name)

    def __repr__(self) -> str:
        return f"NamedPropertyParameter({self.name!r}, {self.value!r})"


class ResolvedParameter(Parameter):
    """Supplies values using arbitrary callbacks.

    Args:
        predicate: ``(descriptor, context) -> bool`` deciding whether to supply
        value_accessor: ``(descriptor, context) -> value``, called lazily

    Example::

        ResolvedParameter(
            lambda d, c: d.name == "connection_string",
            lambda d, c: c.resolve(Settings).database_url,
        )
    """

    def __init__(
        self,
        predicate: Callable[[ParameterDescriptor, Optional[ComponentContext]], bool],
        value_accessor: Callable[[ParameterDescriptor, Optional[ComponentContext]], Any],
    ):
        self._predicate = predicate
        self._value_accessor = value_accessor

    def can_supply_value(self, descriptor, context):
        if not self._predicate(descriptor, context):
            return DECLINED
        accessor = self._value_accessor
        return Supplied(DeferredValue(lambda: accessor(descriptor, context)))


class AutowiringParameter(Parameter):
    """Supplies parameters whose declared type is registered in the context"""

    def can_supply_value(self, descriptor, context):
        service = descriptor.parameter_type
        if context is None or service is inspect.Parameter.empty:
            return DECLINED
        if not context.is_registered(service):
            return DECLINED
        return Supplied(DeferredValue(lambda: context.resolve(service)))

    def __repr__(self) -> str:
        return "AutowiringParameter()"


class DefaultValueParameter(Parameter):
    """Supplies the declared default value of optional parameters"""

    def can_supply_value(self, descriptor, context):
        if not descriptor.has_default:
            return DECLINED
        return Supplied(DeferredValue.computed(descriptor.default))

    def __repr__(self) -> str:
        return "DefaultValueParameter()"


class ParameterChain:
    """An ordered, immutable sequence of parameter sources.

    The first source that supplies a parameter wins; later sources are not
    consulted for it.
    """

    __slots__ = ('_sources',)

    def __init__(self, sources: Iterable[Parameter] = ()):
        self._sources: Tuple[Parameter, ...] = tuple(sources)

    @classmethod
    def prioritised(cls, configured: Iterable[Parameter] = ()) -> 'ParameterChain':
        """Configured parameters, then autowiring, then declared defaults."""
        return cls((*configured, AutowiringParameter(), DefaultValueParameter()))

    def with_leading(self, parameters: Sequence[Parameter]) -> 'ParameterChain':
        """Return a chain with ``parameters`` ahead of this chain's sources.

        Returns this chain unchanged when ``parameters`` is empty.
        """
        if not parameters:
            return self
        return ParameterChain((*parameters, *self._sources))

    @property
    def sources(self) -> Tuple[Parameter, ...]:
        return self._sources

    def supply(
        self,
        descriptor: ParameterDescriptor,
        context: Optional[ComponentContext],
    ) -> SourceResult:
        for source in self._sources:
            result = source.can_supply_value(descriptor, context)
            if isinstance(result, Supplied):
                return result
        return DECLINED

    def __iter__(self):
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return f"ParameterChain({list(self._sources)!r})"
