"""
Binder

ConstructorBinder matches each parameter of one constructor candidate to a
source in a ParameterChain, producing a BoundConstructor. Binding is a pure
function of the candidate, the chain and the context: it records which
deferred factory will produce each value and never invokes one.
"""

import logging
from typing import Any, Callable, Optional, Sequence, Tuple

from .context import ComponentContext
from .deferred import DeferredValue
from .descriptors import ConstructorCandidate
from .exceptions import BindwireError, DependencyResolutionError, InvalidBindingError
from .parameters import ParameterChain, Supplied

logger = logging.getLogger(__name__)


class BoundConstructor:
    """Outcome of binding one constructor: success with factories, or failure.

    Use :meth:`for_bind_success` and :meth:`for_bind_failure` to create
    instances. A BoundConstructor is never mutated after creation.

    Attributes:
        binder: The binder that produced this outcome
        can_instantiate: True for a successful binding
        description: Why binding failed (empty on success)
    """

    __slots__ = ('binder', 'can_instantiate', 'description', '_factories', '_invoker')

    def __init__(
        self,
        binder: 'ConstructorBinder',
        can_instantiate: bool,
        factories: Tuple[DeferredValue, ...],
        description: str,
        invoker: Optional[Callable[..., Any]] = None,
    ):
        self.binder = binder
        self.can_instantiate = can_instantiate
        self.description = description
        self._factories = factories
        self._invoker = invoker

    @classmethod
    def for_bind_success(
        cls,
        binder: 'ConstructorBinder',
        factories: Sequence[DeferredValue],
        invoker: Optional[Callable[..., Any]] = None,
    ) -> 'BoundConstructor':
        """Create a successful binding.

        When ``invoker`` is given it is called directly with the materialized
        values, bypassing the candidate's argument splitting.
        """
        return cls(binder, True, tuple(factories), "", invoker)

    @classmethod
    def for_bind_failure(cls, binder: 'ConstructorBinder', description: str) -> 'BoundConstructor':
        return cls(binder, False, (), description)

    @property
    def candidate(self) -> ConstructorCandidate:
        return self.binder.candidate

    @property
    def parameter_count(self) -> int:
        return self.binder.parameter_count

    def instantiate(self) -> Any:
        """Materialize the factories in parameter order and invoke the constructor.

        Returns:
            The new instance

        Raises:
            InvalidBindingError: When called on a failed binding
            BindwireError: Propagated unchanged from recursive resolution
            DependencyResolutionError: When a value factory or the constructor
                raises any other exception (chained as ``__cause__``)
        """
        if not self.can_instantiate:
            raise InvalidBindingError(
                f"Cannot instantiate a failed binding: {self.description}"
            )

        candidate = self.binder.candidate
        try:
            values = [factory() for factory in self._factories]
            if self._invoker is not None:
                return self._invoker(*values)
            return candidate.invoke(values)
        except BindwireError:
            raise
        except Exception as e:
            raise DependencyResolutionError(
                f"An exception was thrown while invoking {candidate.signature}: {e}"
            ) from e

    def __repr__(self) -> str:
        if self.can_instantiate:
            return f"BoundConstructor(success, {self.candidate.signature})"
        return f"BoundConstructor(failure, {self.description!r})"


class ConstructorBinder:
    """Binds one constructor candidate against a parameter chain."""

    __slots__ = ('candidate',)

    def __init__(self, candidate: ConstructorCandidate):
        self.candidate = candidate

    @property
    def parameter_count(self) -> int:
        return self.candidate.parameter_count

    def get_constructor_invoker(self) -> Optional[Callable[..., Any]]:
        """Return the raw invoker for a zero-parameter candidate, otherwise None."""
        if self.candidate.parameter_count != 0:
            return None
        return self.candidate.invoker

    def bind(
        self,
        parameters: ParameterChain,
        context: Optional[ComponentContext],
    ) -> BoundConstructor:
        """Bind every parameter, stopping at the first one no source supplies.

        Args:
            parameters: The prioritised source chain
            context: Context handed to each source

        Returns:
            A successful BoundConstructor with one factory per parameter,
            or a failed one naming the first unbindable parameter
        """
        factories = []
        for descriptor in self.candidate.parameters:
            result = parameters.supply(descriptor, context)
            if not isinstance(result, Supplied):
                description = (
                    f"Cannot resolve parameter '{descriptor.name}: {descriptor.type_name}' "
                    f"of constructor '{self.candidate.signature}'."
                )
                logger.debug("Binding failed: %s", description)
                return BoundConstructor.for_bind_failure(self, description)
            factories.append(result.factory)

        return BoundConstructor.for_bind_success(self, factories)

    def __repr__(self) -> str:
        return f"ConstructorBinder({self.candidate.signature})"
