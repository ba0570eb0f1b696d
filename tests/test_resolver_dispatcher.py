"""
Resolver Dispatcher Tests

Tests for value and alias resolvers and for dispatching by definition kind.
"""

import sys
import os
import unittest
from dataclasses import dataclass

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from reflectinject import (
    AliasDefinition,
    AliasDefinitionResolver,
    ClassDefinition,
    ClassDefinitionResolver,
    Definition,
    FunctionCallDefinition,
    FunctionCallDefinitionResolver,
    ResolverDispatcher,
    ValueDefinition,
    ValueDefinitionResolver,
)
from reflectinject.exceptions import InvalidDefinitionKindError

from conftest import FakeLookup
from fixtures import CacheService, Database, UserRepository, make_repository


@dataclass(frozen=True)
class UnknownDefinition(Definition):
    name: str


class TestValueAndAliasResolvers(unittest.TestCase):
    """Test the trivial resolvers."""

    def test_value_returned_as_is(self):
        value = object()
        resolver = ValueDefinitionResolver()

        self.assertIs(resolver.resolve(ValueDefinition("v", value)), value)
        self.assertTrue(resolver.is_resolvable(ValueDefinition("v", value)))

    def test_alias_fetches_target(self):
        db = Database()
        lookup = FakeLookup({"fixtures.Database": db})
        resolver = AliasDefinitionResolver(lookup)

        self.assertIs(resolver.resolve(AliasDefinition("app.db", "fixtures.Database")), db)
        self.assertEqual(lookup.calls, ["fixtures.Database"])

    def test_wrong_kind(self):
        with self.assertRaises(InvalidDefinitionKindError):
            ValueDefinitionResolver().resolve(AliasDefinition("a", "b"))

        with self.assertRaises(InvalidDefinitionKindError):
            AliasDefinitionResolver(FakeLookup()).resolve(ValueDefinition("a", 1))


class TestResolverDispatcher(unittest.TestCase):
    """Test dispatching by definition kind."""

    def setUp(self):
        self.lookup = FakeLookup({
            "fixtures.Database": Database(),
            "fixtures.CacheService": CacheService(),
        })
        self.dispatcher = ResolverDispatcher(self.lookup)

    def test_resolver_for_each_kind(self):
        cases = [
            (ClassDefinition("x"), ClassDefinitionResolver),
            (FunctionCallDefinition(make_repository), FunctionCallDefinitionResolver),
            (ValueDefinition("x", 1), ValueDefinitionResolver),
            (AliasDefinition("x", "y"), AliasDefinitionResolver),
        ]
        for definition, resolver_type in cases:
            with self.subTest(definition=type(definition).__name__):
                self.assertIsInstance(self.dispatcher.resolver_for(definition), resolver_type)

    def test_resolve(self):
        self.assertEqual(self.dispatcher.resolve(ValueDefinition("x", 1)), 1)
        self.assertIsInstance(
            self.dispatcher.resolve(ClassDefinition("fixtures.UserRepository")),
            UserRepository,
        )

    def test_is_resolvable(self):
        self.assertTrue(self.dispatcher.is_resolvable(ClassDefinition("fixtures.UserRepository")))
        self.assertFalse(self.dispatcher.is_resolvable(ClassDefinition("fixtures.Transport")))

    def test_unknown_kind(self):
        with self.assertRaises(InvalidDefinitionKindError):
            self.dispatcher.resolve(UnknownDefinition("x"))


if __name__ == "__main__":
    unittest.main()
