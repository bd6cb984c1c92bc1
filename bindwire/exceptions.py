"""
Bindwire Exceptions

Custom exception hierarchy for the Bindwire activation engine
"""

from typing import Sequence


class BindwireError(Exception):
    """
    Base exception for all Bindwire errors.

    All Bindwire-specific exceptions inherit from this class.
    You can catch this to handle any activation error generically.

    Example:
        >>> try:
        ...     service = container.resolve(MyService)
        ... except BindwireError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class ConfigurationError(BindwireError):
    """
    Raised when an activator cannot be configured.

    Configuration errors happen once, while the container is being built,
    and mean the activator cannot be used at all.
    """

    pass


class NoConstructorsFoundError(ConfigurationError):
    """
    Raised when the constructor finder returns no candidates for a type.

    Common causes:
        - The type's ``__init__`` was rejected by a custom finder filter
        - A custom finder that only accepts ``@constructor`` classmethods
          was given a class that declares none

    Solution:
        Check the filter passed to the finder, or declare a constructor::

            class Clock:
                @constructor
                def utc(cls) -> 'Clock':
                    return cls(timezone.utc)

    Attributes:
        implementation_type: The type that has no usable constructors
    """

    def __init__(self, implementation_type: type, message: str):
        super().__init__(message)
        self.implementation_type = implementation_type


class ActivatorConfigurationError(ConfigurationError):
    """
    Raised when an activator is configured twice, or used before configuration.

    Constructor discovery happens exactly once per activator. Create a new
    activator instead of reconfiguring an existing one.
    """

    pass


class DuplicateRegistrationError(ConfigurationError):
    """
    Raised when the same service is registered twice in a container.

    Solution:
        Register each service once, or use a separate container::

            container.register(Database)
            # container.register(Database)  # Don't do this!
    """

    pass


class DependencyResolutionError(BindwireError):
    """
    Raised when no constructor of a type can be bound, or instantiation fails.

    The message lists, for every constructor that failed to bind, the
    parameter that no source could supply. The same descriptions are
    available on ``reasons``.

    Common causes:
        - A constructor parameter's type is not registered and has no default
        - A caller-supplied parameter name or position does not match

    Solution:
        Register the missing dependency, give the parameter a default,
        or pass it explicitly::

            container.resolve(Gadget, NamedParameter("count", 3))

    Attributes:
        reasons: Per-candidate binding failure descriptions, in discovery order
    """

    def __init__(self, message: str, reasons: Sequence[str] = ()):
        super().__init__(message)
        self.reasons = tuple(reasons)


class ComponentNotRegisteredError(DependencyResolutionError):
    """
    Raised when a requested service is not registered in the container.

    Note:
        The error message includes a list of registered types
        to help identify available dependencies.
    """

    pass


class ConstructorSelectorContractError(BindwireError):
    """
    Raised when a constructor selector returns a binding that cannot be instantiated.

    A selector must return a successful binding whenever one exists. This
    error indicates a broken selector implementation, not a runtime
    condition callers are expected to handle.
    """

    pass


class InvalidBindingError(BindwireError):
    """
    Raised when ``instantiate()`` is called on a failed binding.
    """

    pass


class LifecycleError(BindwireError):
    """
    Raised when a component is used outside of its lifetime.
    """

    pass


class ActivatorDisposedError(LifecycleError):
    """
    Raised when activation is attempted on a disposed activator.

    Solution:
        Build a new container (or activator) instead of reusing one that has
        been disposed::

            with ComponentContainer() as container:
                ...
            # container and its activators are now disposed
    """

    pass


class ContainerClosedError(LifecycleError):
    """
    Raised when attempting to use a closed container.

    Common causes:
        - Resolving from a container after calling ``container.close()``
        - Resolving from a container after exiting a ``with`` block
    """

    pass
