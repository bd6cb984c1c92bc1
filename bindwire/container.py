"""
ComponentContainer

This module provides a minimal in-process container built on the
activation engine. It is responsible for:

- Storing registrations (service type -> activator + resolve pipeline)
- Configuring each activator once, when it is registered, so that
  configuration errors surface while the container is being built
- Resolving services through their pipelines; autowired constructor
  parameters resolve back through the same container

Every resolve creates a new instance. Lifetime scopes, sharing and
circular dependency detection are not part of this container.

Example::

    container = ComponentContainer()
    container.register(Logger, ConsoleLogger)
    container.register(Service)

    service = container.resolve(Service)  # Service(logger=ConsoleLogger())
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .activator import ReflectionActivator
from .constructor_finder import ConstructorFinder
from .context import ComponentContext
from .exceptions import (
    ComponentNotRegisteredError,
    ContainerClosedError,
    DuplicateRegistrationError,
)
from .parameters import Parameter
from .pipeline import ResolvePipeline, ResolvePipelineBuilder, ResolveRequestContext
from .selector import ConstructorSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """A registered service"""
    service: Any
    activator: ReflectionActivator
    pipeline: ResolvePipeline


class ComponentContainer(ComponentContext):
    """In-process container resolving services through ReflectionActivators.

    Attributes:
        _registrations: Dictionary mapping service types to registrations
        _closed: Flag indicating if the container has been closed
    """

    def __init__(self):
        self._registrations: Dict[Any, Registration] = {}
        self._lock = threading.Lock()
        self._closed = False

    def _ensure_not_closed(self) -> None:
        """Ensure the container is not closed.

        Raises:
            ContainerClosedError: When the container has been closed
        """
        if self._closed:
            raise ContainerClosedError("This container is already closed")

    def register(
        self,
        service: Any,
        implementation: Optional[type] = None,
        *,
        parameters: Iterable[Parameter] = (),
        properties: Iterable[Parameter] = (),
        constructor_selector: Optional[ConstructorSelector] = None,
        constructor_finder: Optional[ConstructorFinder] = None,
    ) -> Registration:
        """Register an implementation type for a service.

        Args:
            service: The service type requested by consumers
            implementation: The concrete type to activate (default: ``service``)
            parameters: Parameters configured for every activation
            properties: Property sources applied after construction
            constructor_selector: Selector for types with several constructors
            constructor_finder: Constructor discovery policy

        Returns:
            The new Registration

        Raises:
            ContainerClosedError: When the container has been closed
            DuplicateRegistrationError: When the service is already registered
            NoConstructorsFoundError: When the implementation has no usable
                constructors

        Example::

            container.register(Logger, FileLogger, parameters=[NamedParameter("path", "app.log")])
        """
        activator = ReflectionActivator(
            implementation if implementation is not None else service,
            constructor_finder=constructor_finder,
            constructor_selector=constructor_selector,
            configured_parameters=parameters,
            configured_properties=properties,
        )
        return self.register_activator(service, activator)

    def register_activator(self, service: Any, activator: ReflectionActivator) -> Registration:
        """Register a (not yet configured) activator for a service.

        Raises:
            ContainerClosedError: When the container has been closed
            DuplicateRegistrationError: When the service is already registered
            NoConstructorsFoundError: When the activator cannot be configured
        """
        self._ensure_not_closed()
        # A rejected activator must stay unconfigured
        self._ensure_not_registered(service)

        builder = ResolvePipelineBuilder()
        activator.configure(builder)
        registration = Registration(service, activator, builder.build())

        with self._lock:
            self._ensure_not_registered(service)
            self._registrations[service] = registration

        logger.debug("Registered %s as %s", _type_name(service), activator)
        return registration

    def _ensure_not_registered(self, service: Any) -> None:
        if service in self._registrations:
            raise DuplicateRegistrationError(f"{_type_name(service)} is already registered")

    def is_registered(self, service: Any) -> bool:
        return service in self._registrations

    def resolve(self, service: Any, *parameters: Parameter) -> Any:
        """Resolve a new instance of a service.

        Args:
            service: The service type to resolve
            *parameters: Caller-supplied parameters for this activation

        Returns:
            The new instance

        Raises:
            ContainerClosedError: When the container has been closed
            ComponentNotRegisteredError: When the service is not registered
            DependencyResolutionError: When the service cannot be activated
        """
        self._ensure_not_closed()

        registration = self._registrations.get(service)
        if registration is None:
            service_name = _type_name(service)
            registered_types = ", ".join(
                _type_name(t) for t in self._registrations.keys()
            ) or "None"

            raise ComponentNotRegisteredError(
                f"{service_name} is not registered.\n"
                f"Registered types: {registered_types}\n"
                f"Hint: container.register({service_name})"
            )

        ctx = ResolveRequestContext(self, service, list(parameters))
        return registration.pipeline.invoke(ctx).instance

    def __contains__(self, service: Any) -> bool:
        return self.is_registered(service)

    def close(self) -> None:
        """Close the container and dispose every activator.

        This method is idempotent - calling it multiple times has no effect.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            registrations = list(self._registrations.values())

        for registration in registrations:
            registration.activator.dispose()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __enter__(self) -> 'ComponentContainer':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False


def _type_name(t: Any) -> str:
    return t.__name__ if hasattr(t, '__name__') else str(t)
