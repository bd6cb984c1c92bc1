"""
Constructor selectors

A selector picks the binding to instantiate among the bindings of every
candidate constructor. Selectors that can decide from constructor shapes
alone also implement EarlyBindingConstructorSelector, which lets the
activator fix the constructor once at configuration time.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Tuple

from .binder import BoundConstructor, ConstructorBinder
from .exceptions import DependencyResolutionError
from .parameters import Parameter

logger = logging.getLogger(__name__)


class ConstructorSelector(ABC):
    """Selects the binding to instantiate.

    Contract:
        - deterministic for the same bindings
        - must return a successful binding whenever at least one exists
    """

    @abstractmethod
    def select_constructor_binding(
        self,
        bindings: Sequence[BoundConstructor],
        parameters: Sequence[Parameter],
    ) -> BoundConstructor:
        """Select one binding.

        Args:
            bindings: One binding per candidate, in discovery order
            parameters: The caller-supplied parameters for this activation

        Returns:
            The binding to instantiate

        Raises:
            DependencyResolutionError: When no binding can be selected
        """
        pass


class EarlyBindingConstructorSelector(ABC):
    """Capability of selecting a constructor from its static shape alone."""

    @abstractmethod
    def select_constructor_binder(
        self,
        binders: Sequence[ConstructorBinder],
    ) -> Optional[ConstructorBinder]:
        """Pick a binder at configuration time, or None to bind dynamically."""
        pass


class MostParametersConstructorSelector(ConstructorSelector):
    """Selects the successful binding with the most parameters.

    Ties go to the candidate discovered first.
    """

    def select_constructor_binding(self, bindings, parameters):
        best: Optional[BoundConstructor] = None
        for binding in bindings:
            if not binding.can_instantiate:
                continue
            # Strictly greater keeps the earliest candidate on ties
            if best is None or binding.parameter_count > best.parameter_count:
                best = binding

        if best is None:
            raise DependencyResolutionError(
                "None of the constructors could be bound.",
                [b.description for b in bindings],
            )

        logger.debug("Selected constructor %s", best.candidate.signature)
        return best

    def __repr__(self) -> str:
        return "MostParametersConstructorSelector()"


class MatchingSignatureConstructorSelector(ConstructorSelector, EarlyBindingConstructorSelector):
    """Selects the constructor whose parameter types match a signature exactly.

    Example::

        # Always use Service(logger: Logger, clock: Clock)
        MatchingSignatureConstructorSelector(Logger, Clock)
    """

    def __init__(self, *signature: Any):
        self._signature: Tuple[Any, ...] = signature

    def _matches(self, binder: ConstructorBinder) -> bool:
        types = tuple(p.parameter_type for p in binder.candidate.parameters)
        return types == self._signature

    def select_constructor_binder(self, binders):
        for binder in binders:
            if self._matches(binder):
                return binder
        return None

    def select_constructor_binding(self, bindings, parameters):
        for binding in bindings:
            if self._matches(binding.binder):
                if not binding.can_instantiate:
                    raise DependencyResolutionError(binding.description, [binding.description])
                return binding

        raise DependencyResolutionError(
            f"At least one binding must match the signature {self._signature_text}.",
            [b.description for b in bindings if not b.can_instantiate],
        )

    @property
    def _signature_text(self) -> str:
        return "(" + ", ".join(getattr(t, '__name__', str(t)) for t in self._signature) + ")"

    def __repr__(self) -> str:
        return f"MatchingSignatureConstructorSelector{self._signature_text}"
