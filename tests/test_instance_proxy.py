from __future__ import annotations

import unittest

from sample_types import _Counter, _Point, _Box, _Pair, _Maybe, _Slotted, _Callbacks, _Broken, _Item, Account, _User

from testproxy import InstanceProxy, TypeProxy, ArgumentException, MemberNotFoundException, ReadOnlyPropertyException, \
    ConstructionException, ConstructorNotFoundException, AmbiguousConstructorException, LibraryNotFoundException, \
    TypeNotFoundException
from testproxy.configuration import configuration


class TestConstruction(unittest.TestCase):
    def test_for_instance(self):
        counter = _Counter("a")
        proxy = InstanceProxy.for_instance(counter)

        self.assertIs(proxy.instance, counter)
        self.assertIs(proxy.type, _Counter)

    def test_for_instance_requires_instance(self):
        with self.assertRaises(ArgumentException):
            InstanceProxy.for_instance(None)

    def test_for_type(self):
        proxy = InstanceProxy.for_type(_Counter, "a", 3)

        self.assertIsInstance(proxy.instance, _Counter)
        self.assertEqual(proxy.get_value("_count"), 3)

    def test_for_type_proxy(self):
        proxy = InstanceProxy.for_type(TypeProxy.for_type(_Counter), "a", count=4)

        self.assertEqual(proxy.get_value("_count"), 4)

    def test_for_name(self):
        proxy = InstanceProxy.for_name("sample_types", "_Counter", "b")

        self.assertIs(proxy.type, _Counter)
        self.assertEqual(proxy.get_value("name"), "b")

    def test_for_name_lookup_errors(self):
        with self.assertRaises(LibraryNotFoundException):
            InstanceProxy.for_name("no_such_library", "_Counter")

        with self.assertRaises(TypeNotFoundException):
            InstanceProxy.for_name("sample_types", "_NoSuchCounter")

    def test_exact_overload(self):
        self.assertEqual(InstanceProxy.for_type(_Point, 1, 2).get_value("kind"), "int")
        self.assertEqual(InstanceProxy.for_type(_Point, 1.5, 2.5).get_value("kind"), "float")
        self.assertEqual(InstanceProxy.for_type(_Point, "3,4").get_value("x"), 3)

    def test_exact_overload_beats_object(self):
        self.assertEqual(InstanceProxy.for_type(_Box, 5).get_value("value"), 5)
        self.assertIsNone(InstanceProxy.for_type(_Box, None).get_value("value"))

    def test_ambiguous_overload(self):
        with self.assertRaises(AmbiguousConstructorException) as context:
            InstanceProxy.for_type(_Point, 1, 2.5)

        self.assertEqual(len(context.exception.candidates), 2)
        self.assertEqual(context.exception.argument_types, ["int", "float"])

    def test_no_matching_arity(self):
        with self.assertRaises(ConstructorNotFoundException) as context:
            InstanceProxy.for_type(_Point, 1, 2, 3)

        self.assertIsInstance(context.exception, ConstructionException)
        self.assertIn("sample_types._Point", str(context.exception))

        with self.assertRaises(ConstructorNotFoundException):
            InstanceProxy.for_type(_Pair, 1)

    def test_arity_fallback(self):
        proxy = InstanceProxy.for_type(_Pair, "first", 2)

        self.assertEqual(proxy.get_value("first"), "first")
        self.assertEqual(proxy.get_value("second"), 2)

    def test_none_arguments(self):
        self.assertIsNone(InstanceProxy.for_type(_Maybe, None).get_value("value"))

    def test_keyword_arguments(self):
        self.assertEqual(InstanceProxy.for_type(Account, id="a", balance=3).get_value("balance"), 3)
        self.assertEqual(InstanceProxy.for_type(_User, id=1, name="ann").get_value("name"), "ann")

    def test_constructor_errors_propagate(self):
        with self.assertRaises(ValueError):
            InstanceProxy.for_type(_Point, "no comma")

class TestMembers(unittest.TestCase):
    def setUp(self):
        self.proxy = InstanceProxy.for_type(_Counter, "a", 1)

    def test_invoke(self):
        self.assertEqual(self.proxy.invoke("_increment"), 2)
        self.assertEqual(self.proxy.invoke("_increment", by=3), 5)

    def test_invoke_mangled(self):
        self.assertEqual(self.proxy.invoke("__reveal"), "s3cret")

    def test_invoke_static_and_class_methods(self):
        self.assertIsInstance(self.proxy.invoke("_create", "x"), _Counter)
        self.assertEqual(self.proxy.invoke("_prefixed", "x"), "counter:x")

    def test_invoke_instance_callable(self):
        self.assertEqual(InstanceProxy.for_type(_Callbacks).invoke("handler", 2), 6)

    def test_invoke_missing(self):
        with self.assertRaises(MemberNotFoundException) as context:
            self.proxy.invoke("_decrement")

        self.assertEqual(str(context.exception), "Method '_decrement' does not exist on type 'sample_types._Counter'.")

        with self.assertRaises(ArgumentException):
            self.proxy.invoke(None)

    def test_get_value(self):
        self.assertEqual(self.proxy.get_value("name"), "a")
        self.assertEqual(self.proxy.get_value("_count"), 1)
        self.assertEqual(self.proxy.get_value("double"), 2)
        self.assertEqual(self.proxy.get_value("_limit"), 10)
        self.assertEqual(self.proxy.get_value("__secret"), "s3cret")
        self.assertEqual(self.proxy.get_value("PREFIX"), "counter")

    def test_get_indexed_value(self):
        proxy = InstanceProxy.for_instance(_Item("a", _notes=["x", "y"]))

        self.assertEqual(proxy.get_value("_notes", 1), "y")

    def test_getter_errors_propagate(self):
        proxy = InstanceProxy.for_type(_Broken, 2)

        with self.assertRaises(AttributeError) as context:
            proxy.get_value("derived")

        self.assertNotIsInstance(context.exception, MemberNotFoundException)

    def test_deleted_field_reads_declared_default(self):
        item = _Item("a")
        del item._notes

        self.assertIsNone(InstanceProxy.for_instance(item).get_value("_notes"))

        item = _Item("a")
        del item.quantity

        self.assertEqual(InstanceProxy.for_instance(item).get_value("quantity"), 1)

    def test_get_missing(self):
        with self.assertRaises(MemberNotFoundException):
            self.proxy.get_value("missing")

        with self.assertRaises(MemberNotFoundException):
            self.proxy.get_value("_increment")

        with self.assertRaises(ArgumentException):
            self.proxy.get_value(None)

    def test_set_value(self):
        self.proxy.set_value("_count", 7)
        self.proxy.set_value("_limit", 20)
        self.proxy.set_value("__secret", "other")

        self.assertEqual(self.proxy.instance._count, 7)
        self.assertEqual(self.proxy.instance._limit_value, 20)
        self.assertEqual(self.proxy.invoke("__reveal"), "other")

    def test_set_value_defaults_to_none(self):
        self.proxy.set_value("name")

        self.assertIsNone(self.proxy.get_value("name"))

    def test_set_indexed_value(self):
        proxy = InstanceProxy.for_instance(_Item("a", _notes=["x", "y"]))

        proxy.set_value("_notes", "z", 0)

        self.assertEqual(proxy.instance._notes, ["z", "y"])

    def test_set_slot(self):
        proxy = InstanceProxy.for_type(_Slotted, 1)

        proxy.set_value("__hidden", 5)

        self.assertEqual(proxy.get_value("__hidden"), 5)

    def test_set_read_only(self):
        with self.assertRaises(ReadOnlyPropertyException):
            self.proxy.set_value("double", 4)

    def test_set_does_not_create(self):
        with self.assertRaises(MemberNotFoundException):
            self.proxy.set_value("missing", 1)

        self.assertFalse(hasattr(self.proxy.instance, "missing"))

    def test_property_names(self):
        self.assertEqual(self.proxy.property_names(), ["double", "_limit", "name", "_count", "_Counter__secret", "_limit_value"])

        with configuration().override({"reflection": {"include_non_public": False}}):
            self.assertEqual(self.proxy.property_names(), ["double", "name"])

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            self.proxy.type = int


if __name__ == '__main__':
    unittest.main()
