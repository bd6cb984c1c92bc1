"""
Context Module

This module provides the ComponentContext abstract interface that the
autowiring parameter source uses to resolve dependencies recursively.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from .parameters import Parameter

T = TypeVar('T')


class ComponentContext(ABC):
    """Abstract interface for resolving registered services.

    The activation core never resolves anything itself; autowiring asks the
    context whether a parameter's declared type is available and, once the
    winning constructor is instantiated, resolves it.

    Implementations:
        - ComponentContainer: the in-process container shipped with Bindwire
        - Custom contexts: adapters onto another container, or test doubles

    Example::

        class DictContext(ComponentContext):
            def __init__(self, services):
                self._services = services

            def is_registered(self, service) -> bool:
                return service in self._services

            def resolve(self, service, *parameters):
                return self._services[service]()
    """

    @abstractmethod
    def is_registered(self, service: Any) -> bool:
        """Check whether a service can be resolved from this context.

        Args:
            service: The service type

        Returns:
            True if ``resolve(service)`` would find a registration
        """
        pass

    @abstractmethod
    def resolve(self, service: Any, *parameters: 'Parameter') -> Any:
        """Resolve a service.

        Args:
            service: The service type to resolve
            *parameters: Caller-supplied parameters for the activation

        Returns:
            The resolved instance

        Raises:
            ComponentNotRegisteredError: When the service is not registered
            DependencyResolutionError: When the service cannot be activated
        """
        pass
