"""
Introspection Tests

Tests for describe_type(), the @constructor marker and constructor finders.
"""

import gc
import inspect
import unittest
import weakref
from typing import Optional

from bindwire import (
    ConfigurationError,
    DefaultConstructorFinder,
    constructor,
    describe_type,
    public_constructors,
)
from fixtures import Logger, Service, Settings, UserRepository, Widget


class Base:
    """Base class with an alternate constructor and a property"""

    def __init__(self, value: int):
        self._value = value

    @constructor
    def zero(cls):
        return cls(0)

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, new_value: int):
        self._value = new_value


class Derived(Base):
    """Subclass shadowing the alternate constructor"""

    @constructor
    def zero(cls):
        return cls(-1)

    @constructor
    def _hidden(cls):
        return cls(42)


class Untyped:
    """Constructor without annotations"""

    def __init__(self, anything, *args, flag=True, **kwargs):
        self.anything = anything


class ForwardReferencing:
    """Constructor with a string annotation"""

    def __init__(self, logger: 'Logger', parent: Optional['ForwardReferencing'] = None):
        self.logger = logger


class OptionalByDefault:
    """Dependency with a None default and a plain annotation"""

    def __init__(self, logger: Logger = None):
        self.logger = logger


class Broken:
    """Constructor referencing an undefined name"""

    def __init__(self, missing: 'DoesNotExist'):  # noqa: F821
        pass


class NoInit:
    pass


class TestDescribeType(unittest.TestCase):
    """describe_type()"""

    def test_init_is_first_candidate(self):
        descriptor = describe_type(UserRepository)
        (candidate,) = descriptor.constructors

        self.assertEqual(candidate.name, "UserRepository.__init__")
        self.assertEqual([p.name for p in candidate.parameters], ["logger", "clock"])
        self.assertEqual([p.position for p in candidate.parameters], [0, 1])
        self.assertEqual(candidate.parameters[0].parameter_type, Logger)

    def test_alternate_constructors_follow_init(self):
        names = [c.name for c in describe_type(Service).constructors]

        self.assertEqual(names, ["Service.__init__", "Service.with_logger"])

    def test_alternate_constructor_invoker_creates_instance(self):
        (_, with_logger) = describe_type(Service).constructors
        logger = Logger()

        service = with_logger.invoke([logger])

        self.assertIs(service.logger, logger)

    def test_class_without_init_has_zero_parameter_candidate(self):
        (candidate,) = describe_type(NoInit).constructors

        self.assertEqual(candidate.parameter_count, 0)
        self.assertIsInstance(candidate.invoke([]), NoInit)

    def test_subclass_shadows_inherited_constructor(self):
        names = [c.name for c in describe_type(Derived).constructors]

        self.assertEqual(names, ["Derived.__init__", "Derived.zero", "Derived._hidden"])
        self.assertEqual(describe_type(Derived).constructors[1].invoke([]).value, -1)

    def test_variadic_parameters_are_skipped(self):
        (candidate,) = describe_type(Untyped).constructors

        self.assertEqual([p.name for p in candidate.parameters], ["anything", "flag"])
        self.assertIs(candidate.parameters[0].parameter_type, inspect.Parameter.empty)
        self.assertTrue(candidate.parameters[1].has_default)
        self.assertTrue(candidate.parameters[1].default)

    def test_forward_references_resolve(self):
        (candidate,) = describe_type(ForwardReferencing).constructors

        self.assertIs(candidate.parameters[0].parameter_type, Logger)
        self.assertEqual(candidate.parameters[1].parameter_type, Optional[ForwardReferencing])

    def test_none_default_keeps_declared_type(self):
        """A None default does not widen the annotation to Optional"""
        (candidate,) = describe_type(OptionalByDefault).constructors

        self.assertIs(candidate.parameters[0].parameter_type, Logger)
        self.assertTrue(candidate.parameters[0].has_default)

    def test_unresolvable_forward_reference_raises(self):
        with self.assertRaises(ConfigurationError) as ctx:
            describe_type(Broken)

        self.assertIn("DoesNotExist", str(ctx.exception))

    def test_non_class_raises(self):
        with self.assertRaises(ConfigurationError):
            describe_type(len)

    def test_described_types_are_not_kept_alive(self):
        """Describing a class holds no reference once the descriptor is gone"""
        def make_type():
            class Throwaway:
                def __init__(self, value: int):
                    self.value = value
            return Throwaway

        throwaway = make_type()
        descriptor = describe_type(throwaway)
        self.assertEqual(descriptor.constructors[0].parameter_count, 1)

        ref = weakref.ref(throwaway)
        del throwaway, descriptor
        gc.collect()

        self.assertIsNone(ref())

    def test_each_call_builds_an_equal_descriptor(self):
        self.assertEqual(describe_type(Widget), describe_type(Widget))

    def test_settable_properties_in_definition_order(self):
        properties = describe_type(Settings).properties

        self.assertEqual([p.name for p in properties], ["host", "port", "label"])
        self.assertEqual(properties[1].setter_parameter.parameter_type, int)
        self.assertEqual(properties[1].setter_parameter.member, "port")

    def test_inherited_properties(self):
        self.assertEqual([p.name for p in describe_type(Derived).properties], ["value"])


class TestConstructorMarker(unittest.TestCase):
    """@constructor"""

    def test_accepts_classmethod(self):
        class Clock:
            @constructor
            @classmethod
            def system(cls):
                return cls()

        self.assertIsInstance(Clock.system(), Clock)
        self.assertEqual([c.name for c in describe_type(Clock).constructors],
                         ["Clock.__init__", "Clock.system"])

    def test_plain_classmethods_are_not_candidates(self):
        class Clock:
            @classmethod
            def system(cls):
                return cls()

        self.assertEqual(len(describe_type(Clock).constructors), 1)


class TestDefaultConstructorFinder(unittest.TestCase):
    """DefaultConstructorFinder"""

    def test_default_policy_hides_underscored_constructors(self):
        names = [c.name for c in DefaultConstructorFinder().find_constructors(Derived)]

        self.assertEqual(names, ["Derived.__init__", "Derived.zero"])

    def test_public_constructors_keeps_init(self):
        (init, *_) = describe_type(Derived).constructors

        self.assertTrue(public_constructors(init))

    def test_custom_filter(self):
        finder = DefaultConstructorFinder(lambda c: c.parameter_count == 0)

        names = [c.name for c in finder.find_constructors(Derived)]

        self.assertEqual(names, ["Derived.zero", "Derived._hidden"])

    def test_custom_type_describer(self):
        calls = []

        def describer(cls):
            calls.append(cls)
            return describe_type(cls)

        DefaultConstructorFinder(type_describer=describer).find_constructors(Widget)

        self.assertEqual(calls, [Widget])

    def test_repr_names_filter(self):
        self.assertEqual(repr(DefaultConstructorFinder()), "DefaultConstructorFinder(public_constructors)")


if __name__ == '__main__':
    unittest.main()
