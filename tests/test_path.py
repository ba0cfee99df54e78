import unittest
from collections import namedtuple
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from explicit_mapper import MISSING, resolve_path, create_mapper


@dataclass
class Address:
    city: str
    zip: Optional[str] = None

@dataclass
class Person:
    name: str
    address: Optional[Address] = None

class Customer(BaseModel):
    id: int
    email: str
    active: bool = False

class Plain:
    def __init__(self, value):
        self.value = value
        self.extra = "extra"

    @property
    def computed(self):
        return self.value * 2

Point = namedtuple("Point", ["x", "y"])

class TestResolvePath(unittest.TestCase):
    def test_dict(self):
        self.assertEqual(resolve_path({"a": {"b": {"c": 1}}}, "a.b.c"), 1)
        self.assertIs(resolve_path({"a": {}}, "a.b"), MISSING)
        self.assertIs(resolve_path({}, "a"), MISSING)

    def test_none_is_present(self):
        self.assertIsNone(resolve_path({"a": None}, "a"))
        self.assertIs(resolve_path({"a": None}, "a.b"), MISSING)
        self.assertIs(resolve_path(None, "a"), MISSING)

    def test_falsy_values_are_present(self):
        for value in [False, 0, "", [], {}]:
            self.assertEqual(resolve_path({"a": value}, "a"), value)

    def test_scalars_have_no_fields(self):
        self.assertIs(resolve_path({"a": "text"}, "a.upper"), MISSING)
        self.assertIs(resolve_path({"a": 5}, "a.real"), MISSING)

    def test_list_indices(self):
        source = {"items": [{"name": "first"}, {"name": "second"}]}

        self.assertEqual(resolve_path(source, "items.1.name"), "second")
        self.assertIs(resolve_path(source, "items.2.name"), MISSING)
        self.assertIs(resolve_path(source, "items.name"), MISSING)
        self.assertIs(resolve_path(source, "items.-1"), MISSING)

    def test_non_ascii_digits_are_not_indices(self):
        source = {"items": [1, 2, 3]}

        self.assertIs(resolve_path(source, "items.²"), MISSING)
        self.assertIs(resolve_path(source, "items.٣"), MISSING)
        self.assertEqual(create_mapper([{"items.²": "x"}]).map(source), {})

    def test_dataclass(self):
        person = Person(name="Ada", address=Address(city="London"))

        self.assertEqual(resolve_path(person, "address.city"), "London")
        self.assertIsNone(resolve_path(person, "address.zip"))
        self.assertIs(resolve_path(person, "address.street"), MISSING)
        self.assertIs(resolve_path(Person(name="Bob"), "address.city"), MISSING)

    def test_pydantic(self):
        customer = Customer(id=1, email="ada@example.org")

        self.assertEqual(resolve_path(customer, "email"), "ada@example.org")
        self.assertIs(resolve_path(customer, "active"), False)
        self.assertIs(resolve_path(customer, "unknown"), MISSING)

    def test_plain_object(self):
        plain = Plain(3)

        self.assertEqual(resolve_path(plain, "value"), 3)
        self.assertEqual(resolve_path(plain, "extra"), "extra")
        self.assertEqual(resolve_path(plain, "computed"), 6)
        self.assertIs(resolve_path(plain, "unknown"), MISSING)

    def test_named_tuple_is_an_object(self):
        self.assertEqual(resolve_path({"p": Point(1, 2)}, "p.y"), 2)

class TestMapObjects(unittest.TestCase):
    def test_map_dataclasses(self):
        mapper = create_mapper([
            "name",
            {"address.city": "city"}
        ])

        people = [Person(name="Ada", address=Address(city="London")), Person(name="Bob")]

        self.assertEqual(mapper.map(people), [
            {"name": "Ada", "city": "London"},
            {"name": "Bob"}
        ])

    def test_map_pydantic(self):
        mapper = create_mapper([{"id": "customerId"}, "active"])

        self.assertEqual(mapper.map(Customer(id=7, email="x")), {"customerId": 7, "active": False})

    def test_named_tuple_input_is_a_single_object(self):
        mapper = create_mapper(["x"])

        self.assertEqual(mapper.map(Point(1, 2)), {"x": 1})


if __name__ == '__main__':
    unittest.main()
