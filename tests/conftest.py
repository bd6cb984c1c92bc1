"""
Test Configuration and Utilities

Common base classes and helper functions for Bindwire tests
"""

import unittest
from typing import Any, Callable, Dict, List, Optional

from bindwire import ComponentContainer, ComponentContext, ReflectionActivator


class BindwireTestCase(unittest.TestCase):
    """
    Base test case class for container tests.

    Creates a fresh container before each test and closes it afterwards.
    """

    def setUp(self):
        """Create a fresh container before each test"""
        self.container = ComponentContainer()

    def tearDown(self):
        """Close the container after each test"""
        self.container.close()


class StubContext(ComponentContext):
    """
    Context backed by plain factories.

    Records every resolved service so tests can check whether (and in which
    order) autowiring actually ran.

    Example:
        >>> context = StubContext({Logger: Logger})
        >>> context.resolve(Logger)
        >>> context.resolved
        [Logger]
    """

    def __init__(self, factories: Optional[Dict[Any, Callable[[], Any]]] = None):
        self.factories = dict(factories or {})
        self.resolved: List[Any] = []

    def is_registered(self, service: Any) -> bool:
        return service in self.factories

    def resolve(self, service: Any, *parameters) -> Any:
        self.resolved.append(service)
        return self.factories[service]()


def configured_activator(implementation_type: type, **kwargs) -> ReflectionActivator:
    """
    Create and configure an activator.

    Args:
        implementation_type: The type to activate
        **kwargs: Passed to ReflectionActivator

    Returns:
        A configured ReflectionActivator

    Example:
        >>> activator = configured_activator(Widget)
        >>> activator.activate(None)
    """
    activator = ReflectionActivator(implementation_type, **kwargs)
    activator.configure()
    return activator
