"""
Deferred values

Binding records *how* a parameter value will be produced without producing
it. The value is only computed when the winning constructor is
instantiated, so recursive resolution never runs for losing candidates.
"""

from typing import Any, Callable, Generic, TypeVar

T = TypeVar('T')


class _NotYetComputed:
    """Marker for a deferred value that has not been produced yet"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotYetComputed"


NOT_YET_COMPUTED: Any = _NotYetComputed()


class DeferredValue(Generic[T]):
    """A thunk computed at most once.

    Example::

        value = DeferredValue(lambda: context.resolve(Logger))
        value.is_computed  # False
        logger = value()   # resolves Logger
        value() is logger  # True, not resolved again
    """

    __slots__ = ('_factory', '_value')

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: Any = NOT_YET_COMPUTED

    @classmethod
    def computed(cls, value: T) -> 'DeferredValue[T]':
        deferred = cls(lambda: value)
        deferred._value = value
        deferred._factory = None
        return deferred

    @property
    def is_computed(self) -> bool:
        return self._value is not NOT_YET_COMPUTED

    def __call__(self) -> T:
        if self._value is NOT_YET_COMPUTED:
            self._value = self._factory()
            # Release the closure (and whatever context it captured)
            self._factory = None
        return self._value

    def __repr__(self) -> str:
        if self.is_computed:
            return f"Computed({self._value!r})"
        return "NotYetComputed"
