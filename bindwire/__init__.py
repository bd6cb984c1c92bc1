from importlib import metadata as _metadata

# Public API
from .activator import ReflectionActivator
from .binder import BoundConstructor, ConstructorBinder
from .constructor_finder import ConstructorFinder, DefaultConstructorFinder, public_constructors
from .container import ComponentContainer, Registration
from .context import ComponentContext
from .deferred import DeferredValue
from .descriptors import (
    ConstructorCandidate,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from .exceptions import (
    ActivatorConfigurationError,
    ActivatorDisposedError,
    BindwireError,
    ComponentNotRegisteredError,
    ConfigurationError,
    ConstructorSelectorContractError,
    ContainerClosedError,
    DependencyResolutionError,
    DuplicateRegistrationError,
    InvalidBindingError,
    LifecycleError,
    NoConstructorsFoundError,
)
from .introspection import constructor, describe_type
from .parameters import (
    DECLINED,
    AutowiringParameter,
    ConstantParameter,
    DefaultValueParameter,
    NamedParameter,
    NamedPropertyParameter,
    Parameter,
    ParameterChain,
    PositionalParameter,
    ResolvedParameter,
    Supplied,
    TypedParameter,
)
from .pipeline import (
    MiddlewareInsertionMode,
    PipelinePhase,
    ResolvePipeline,
    ResolvePipelineBuilder,
    ResolveRequestContext,
)
from .property_injector import PropertyInjector
from .selector import (
    ConstructorSelector,
    EarlyBindingConstructorSelector,
    MatchingSignatureConstructorSelector,
    MostParametersConstructorSelector,
)

__all__ = [
    "ReflectionActivator",
    "ComponentContainer",
    "ComponentContext",
    "Registration",
    # Discovery
    "constructor",
    "describe_type",
    "ConstructorFinder",
    "DefaultConstructorFinder",
    "public_constructors",
    "ConstructorCandidate",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "TypeDescriptor",
    # Binding
    "ConstructorBinder",
    "BoundConstructor",
    "DeferredValue",
    "PropertyInjector",
    # Parameters
    "Parameter",
    "ParameterChain",
    "ConstantParameter",
    "NamedParameter",
    "PositionalParameter",
    "TypedParameter",
    "NamedPropertyParameter",
    "ResolvedParameter",
    "AutowiringParameter",
    "DefaultValueParameter",
    "Supplied",
    "DECLINED",
    # Selection
    "ConstructorSelector",
    "EarlyBindingConstructorSelector",
    "MostParametersConstructorSelector",
    "MatchingSignatureConstructorSelector",
    # Pipeline
    "PipelinePhase",
    "MiddlewareInsertionMode",
    "ResolvePipeline",
    "ResolvePipelineBuilder",
    "ResolveRequestContext",
    # Exceptions
    "BindwireError",
    "ConfigurationError",
    "NoConstructorsFoundError",
    "ActivatorConfigurationError",
    "DuplicateRegistrationError",
    "DependencyResolutionError",
    "ComponentNotRegisteredError",
    "ConstructorSelectorContractError",
    "InvalidBindingError",
    "LifecycleError",
    "ActivatorDisposedError",
    "ContainerClosedError",
]

# Version is read from the installed distribution metadata (pyproject.toml)
try:
    __version__ = _metadata.version("bindwire")
except _metadata.PackageNotFoundError:
    # Source tree that was never installed
    __version__ = "0.0.0"
