"""
Constructor finders

A constructor finder decides which constructors of a type are candidates
for activation. Finders are consulted once, when an activator is configured.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

from .descriptors import ConstructorCandidate, TypeDescriptor
from .introspection import describe_type


def public_constructors(candidate: ConstructorCandidate) -> bool:
    """Default visibility policy: reject alternate constructors named with a leading underscore."""
    if candidate.name.endswith('.__init__'):
        return True
    return not candidate.name.rsplit('.', 1)[-1].startswith('_')


class ConstructorFinder(ABC):
    """Finds the candidate constructors of an implementation type"""

    @abstractmethod
    def find_constructors(self, implementation_type: type) -> Tuple[ConstructorCandidate, ...]:
        """Return the candidates in a stable discovery order (possibly empty)."""
        ...


class DefaultConstructorFinder(ConstructorFinder):
    """Finds ``__init__`` and ``@constructor`` classmethods, filtered by a policy.

    Args:
        filter: Predicate applied to each discovered candidate. Defaults to
            :func:`public_constructors`.
        type_describer: Introspection collaborator building the type's
            constructor table. Defaults to :func:`describe_type`.

    Example::

        # Only constructors taking at most two arguments
        finder = DefaultConstructorFinder(lambda c: c.parameter_count <= 2)
    """

    def __init__(
        self,
        filter: Optional[Callable[[ConstructorCandidate], bool]] = None,
        type_describer: Callable[[type], TypeDescriptor] = describe_type,
    ):
        self._filter = filter or public_constructors
        self._type_describer = type_describer

    def find_constructors(self, implementation_type: type) -> Tuple[ConstructorCandidate, ...]:
        descriptor = self._type_describer(implementation_type)
        return tuple(c for c in descriptor.constructors if self._filter(c))

    def __repr__(self) -> str:
        name = getattr(self._filter, '__name__', repr(self._filter))
        return f"DefaultConstructorFinder({name})"
