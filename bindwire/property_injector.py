"""
PropertyInjector

Applies configured property sources to a freshly constructed instance.
Each configured source is offered the instance's settable properties in a
stable order; the first property it supplies is set and removed from the
pool, so no property receives more than one configured value. A source
that matches nothing is skipped.

The settable properties of each instance type are described once and kept
for the lifetime of the injector (and so of its activator).
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .context import ComponentContext
from .descriptors import PropertyDescriptor, TypeDescriptor
from .introspection import describe_type
from .parameters import Parameter, Supplied

logger = logging.getLogger(__name__)


class PropertyInjector:
    """Injects configured properties after construction.

    Args:
        configured_properties: Property value sources, applied in order
        type_describer: Introspection collaborator returning the settable
            properties of the instance type
    """

    def __init__(
        self,
        configured_properties: Iterable[Parameter] = (),
        type_describer: Callable[[type], TypeDescriptor] = describe_type,
    ):
        self._configured_properties: Tuple[Parameter, ...] = tuple(configured_properties)
        self._type_describer = type_describer
        self._properties: Dict[type, Tuple[PropertyDescriptor, ...]] = {}

    @property
    def configured_properties(self) -> Tuple[Parameter, ...]:
        return self._configured_properties

    def inject(self, instance: Any, context: Optional[ComponentContext]) -> None:
        if not self._configured_properties:
            return

        remaining = list(self._settable_properties(type(instance)))

        for configured in self._configured_properties:
            for prop in remaining:
                result = configured.can_supply_value(prop.setter_parameter, context)
                if isinstance(result, Supplied):
                    remaining.remove(prop)
                    prop.set_value(instance, result.factory())
                    break
            else:
                logger.debug(
                    "No settable property of %s matched %r; skipped",
                    type(instance).__name__, configured,
                )

    def _settable_properties(self, instance_type: type) -> Tuple[PropertyDescriptor, ...]:
        properties = self._properties.get(instance_type)
        if properties is None:
            # Racing threads may both describe the type; the tables are equal
            properties = self._type_describer(instance_type).properties
            self._properties[instance_type] = properties
        return properties
