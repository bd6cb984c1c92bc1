"""
ReflectionActivator

This module provides the activation stage: it creates instances of an
implementation type by choosing a constructor, binding its parameters,
invoking it and injecting configured properties. It is responsible for:

- Discovering candidate constructors once, at configuration time
- Choosing an activation path once, at configuration time:
    * a single zero-parameter constructor is pre-bound (no per-call binding)
    * a single constructor, or one fixed by an early-binding selector,
      is bound per call without scoring other candidates
    * otherwise every candidate is bound per call and a selector picks one
- Aggregating binding failures into one DependencyResolutionError

Candidate tables and the chosen path are read-only after configuration and
shared freely between threads. Bindings are created per call.

Example::

    activator = ReflectionActivator(
        Service,
        configured_properties=[NamedPropertyParameter("name", "primary")],
    )
    activator.configure()
    service = activator.activate(container, [NamedParameter("retries", 3)])
"""

import logging
import threading
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from .binder import BoundConstructor, ConstructorBinder
from .constructor_finder import ConstructorFinder, DefaultConstructorFinder
from .context import ComponentContext
from .descriptors import TypeDescriptor
from .exceptions import (
    ActivatorConfigurationError,
    ActivatorDisposedError,
    ConstructorSelectorContractError,
    DependencyResolutionError,
    NoConstructorsFoundError,
)
from .introspection import describe_type
from .parameters import Parameter, ParameterChain
from .pipeline import (
    MiddlewareInsertionMode,
    Next,
    PipelinePhase,
    ResolvePipelineBuilder,
    ResolveRequestContext,
)
from .property_injector import PropertyInjector
from .selector import (
    ConstructorSelector,
    EarlyBindingConstructorSelector,
    MostParametersConstructorSelector,
)

logger = logging.getLogger(__name__)

Activation = Callable[[Optional[ComponentContext], Sequence[Parameter]], Any]


class ReflectionActivator:
    """Activates instances of a type through its discovered constructors.

    Attributes:
        constructor_finder: Finder used once to discover candidates
        constructor_selector: Selector used when several candidates bind

    Args:
        implementation_type: The concrete type to activate
        constructor_finder: Candidate discovery policy
            (default: DefaultConstructorFinder)
        constructor_selector: Selection policy
            (default: MostParametersConstructorSelector)
        configured_parameters: Parameters configured for every activation,
            ranked after caller-supplied parameters
        configured_properties: Property sources applied after construction
        type_describer: Introspection collaborator (default: describe_type)
    """

    def __init__(
        self,
        implementation_type: type,
        constructor_finder: Optional[ConstructorFinder] = None,
        constructor_selector: Optional[ConstructorSelector] = None,
        configured_parameters: Iterable[Parameter] = (),
        configured_properties: Iterable[Parameter] = (),
        type_describer: Callable[[type], TypeDescriptor] = describe_type,
    ):
        if implementation_type is None:
            raise TypeError("implementation_type must not be None")

        self._implementation_type = implementation_type
        self.constructor_finder = constructor_finder or DefaultConstructorFinder(
            type_describer=type_describer
        )
        self.constructor_selector = constructor_selector or MostParametersConstructorSelector()
        self._default_parameters = ParameterChain.prioritised(configured_parameters)
        self._property_injector = PropertyInjector(configured_properties, type_describer)

        self._binders: Tuple[ConstructorBinder, ...] = ()
        self._activation: Optional[Activation] = None
        self._configure_lock = threading.Lock()
        self._disposed = threading.Event()

    @property
    def limit_type(self) -> type:
        """The most specific type that activated instances are known to have."""
        return self._implementation_type

    @property
    def binders(self) -> Tuple[ConstructorBinder, ...]:
        """Binders for the discovered candidates, in discovery order."""
        return self._binders

    @property
    def is_configured(self) -> bool:
        return self._activation is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed.is_set()

    def configure(self, pipeline_builder: Optional[ResolvePipelineBuilder] = None) -> None:
        """Discover constructors and choose the activation path.

        Args:
            pipeline_builder: When given, the activator is registered as
                middleware at the end of the ACTIVATION phase

        Raises:
            NoConstructorsFoundError: When the finder returns no candidates
            ActivatorConfigurationError: When called more than once
        """
        with self._configure_lock:
            if self._activation is not None:
                raise ActivatorConfigurationError(f"{self} is already configured")

            candidates = self.constructor_finder.find_constructors(self._implementation_type)
            if not candidates:
                raise self._no_constructors_found()

            self._binders = tuple(ConstructorBinder(c) for c in candidates)
            self._activation = self._choose_activation(self._binders)

        if pipeline_builder is not None:
            pipeline_builder.use(
                str(self),
                PipelinePhase.ACTIVATION,
                MiddlewareInsertionMode.END_OF_PHASE,
                self._activation_middleware,
            )

    def activate(
        self,
        context: Optional[ComponentContext],
        parameters: Sequence[Parameter] = (),
    ) -> Any:
        """Activate a new instance.

        Args:
            context: Context used to autowire dependencies
            parameters: Caller-supplied parameters; they take precedence over
                configured parameters, autowiring and defaults

        Returns:
            The new instance, with configured properties injected

        Raises:
            ActivatorDisposedError: When the activator has been disposed
            ActivatorConfigurationError: When configure() has not been called
            DependencyResolutionError: When no constructor can be bound, or
                instantiation fails
            ConstructorSelectorContractError: When the selector returns a
                failed binding
        """
        self._check_not_disposed()

        activation = self._activation
        if activation is None:
            raise ActivatorConfigurationError(f"{self} must be configured before activation")

        instance = activation(context, parameters)
        self._property_injector.inject(instance, context)
        return instance

    def dispose(self) -> None:
        """Mark the activator as disposed. Idempotent."""
        self._disposed.set()

    def __enter__(self) -> 'ReflectionActivator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.dispose()
        return False

    def __repr__(self) -> str:
        return f"ReflectionActivator ({self._type_name})"

    @property
    def _type_name(self) -> str:
        return getattr(self._implementation_type, '__name__', str(self._implementation_type))

    def _activation_middleware(self, ctx: ResolveRequestContext, nxt: Next) -> None:
        ctx.instance = self.activate(ctx.component_context, ctx.parameters)
        nxt(ctx)

    def _no_constructors_found(self) -> NoConstructorsFoundError:
        return NoConstructorsFoundError(
            self._implementation_type,
            f"No accessible constructors were found for the type "
            f"'{self._type_name}' using {self.constructor_finder!r}.",
        )

    def _check_not_disposed(self) -> None:
        if self._disposed.is_set():
            raise ActivatorDisposedError(
                f"{self} has been disposed. Cannot activate instances after disposal."
            )

    def _choose_activation(self, binders: Tuple[ConstructorBinder, ...]) -> Activation:
        if len(binders) == 1:
            return self._single_constructor_activation(binders[0])

        if isinstance(self.constructor_selector, EarlyBindingConstructorSelector):
            matched = self.constructor_selector.select_constructor_binder(binders)
            if matched is not None:
                logger.debug("%s: constructor fixed early to %s", self, matched.candidate.signature)
                return self._single_constructor_activation(matched)

        logger.debug("%s: binding %d constructors per activation", self, len(binders))
        return self._dynamic_activation

    def _single_constructor_activation(self, binder: ConstructorBinder) -> Activation:
        if binder.parameter_count == 0:
            invoker = binder.get_constructor_invoker()
            if invoker is None:
                raise self._no_constructors_found()

            # No arguments: bypass binding entirely and pre-bind the constructor
            bound = BoundConstructor.for_bind_success(binder, (), invoker)
            logger.debug("%s: pre-bound %s", self, binder.candidate.signature)

            def activate_prebound(context, parameters):
                return bound.instantiate()

            return activate_prebound

        def activate_single(context, parameters):
            bound = binder.bind(self._get_all_parameters(parameters), context)
            if not bound.can_instantiate:
                raise DependencyResolutionError(
                    self._binding_failure_message([bound]), [bound.description]
                )
            return bound.instantiate()

        return activate_single

    def _dynamic_activation(
        self,
        context: Optional[ComponentContext],
        parameters: Sequence[Parameter],
    ) -> Any:
        bindings = self._get_all_bindings(context, parameters)

        selected = self.constructor_selector.select_constructor_binding(bindings, parameters)
        if not selected.can_instantiate:
            raise ConstructorSelectorContractError(
                f"{type(self.constructor_selector).__name__} selected a binding that "
                f"cannot be instantiated. Selectors must return a successful binding."
            )
        return selected.instantiate()

    def _get_all_bindings(
        self,
        context: Optional[ComponentContext],
        parameters: Sequence[Parameter],
    ) -> Tuple[BoundConstructor, ...]:
        chain = self._get_all_parameters(parameters)
        bindings = tuple(binder.bind(chain, context) for binder in self._binders)

        if not any(b.can_instantiate for b in bindings):
            raise DependencyResolutionError(
                self._binding_failure_message(bindings),
                [b.description for b in bindings],
            )
        return bindings

    def _get_all_parameters(self, parameters: Sequence[Parameter]) -> ParameterChain:
        # Caller parameters outrank configured ones; with none, reuse the default chain
        return self._default_parameters.with_leading(parameters)

    def _binding_failure_message(self, bindings: Iterable[BoundConstructor]) -> str:
        reasons = "".join(f"\n{b.description}" for b in bindings if not b.can_instantiate)
        return (
            f"None of the constructors found with {self.constructor_finder!r} on type "
            f"'{self._type_name}' can be invoked with the available services and "
            f"parameters:{reasons}"
        )
