"""
Tests for accessor-safe member enumeration.
"""

import functools
from types import SimpleNamespace

from promisifyall.core import (
    MemberKind,
    classify,
    enumerate_members,
    looks_like_constructor,
    own_dict,
    own_members,
    resolve_static,
)
from promisifyall.core.reflector import lookup_chain, member_sources
from promisifyall.testing import AccessorProbe, make_accessor_class


class TestClassify:
    """Classification by raw value type."""

    def test_class_members(self):
        def method(self):
            pass

        assert classify(method, in_class=True) is MemberKind.DATA_FUNCTION
        assert classify(staticmethod(method), in_class=True) is MemberKind.DATA_FUNCTION
        assert classify(classmethod(method), in_class=True) is MemberKind.DATA_FUNCTION
        assert classify(property(method), in_class=True) is MemberKind.ACCESSOR
        assert classify(functools.cached_property(method), in_class=True) is MemberKind.ACCESSOR
        assert classify(42, in_class=True) is MemberKind.DATA_OTHER
        assert classify(dict, in_class=True) is MemberKind.CLASS

    def test_object_members(self):
        # Descriptors stored on instances are inert values
        assert classify(property(lambda self: 1), in_class=False) is MemberKind.DATA_OTHER
        assert classify(len, in_class=False) is MemberKind.DATA_FUNCTION
        assert classify(lambda: None, in_class=False) is MemberKind.DATA_FUNCTION
        assert classify('text', in_class=False) is MemberKind.DATA_OTHER
        assert classify(SimpleNamespace, in_class=False) is MemberKind.CLASS


class TestOwnMembers:
    """Reading raw namespaces."""

    def test_slots_object_has_no_own_members(self):
        class Slotted:
            __slots__ = ('value',)

        instance = Slotted()
        instance.value = 1

        assert own_dict(instance) == {}
        assert own_members(instance) == []

    def test_custom_getattribute_is_bypassed(self):
        class Guarded:
            def __getattribute__(self, name):
                raise AssertionError(f"looked up {name}")

        instance = Guarded()
        object.__setattr__(instance, 'fn', len)

        assert [m.name for m in own_members(instance)] == ['fn']

    def test_non_string_keys_are_skipped(self):
        o = SimpleNamespace(fn=len)
        vars(o)[1] = len

        assert [m.name for m in own_members(o)] == ['fn']

    def test_accessors_are_never_invoked(self):
        probe = AccessorProbe()
        cls = make_accessor_class(probe)

        kinds = {m.name: m.kind for m in own_members(cls)}
        enumerate_members(cls())

        assert kinds['counter'] is MemberKind.ACCESSOR
        assert kinds['thrower'] is MemberKind.ACCESSOR
        assert kinds['test'] is MemberKind.DATA_FUNCTION
        assert probe.getter_calls == 0


class TestLookupChain:
    """Member sources and shadowing."""

    def test_chain_excludes_object(self):
        class Base:
            pass

        class Child(Base):
            pass

        instance = Child()

        assert lookup_chain(Child) == [Child, Base]
        assert lookup_chain(instance) == [instance, Child, Base]
        assert member_sources(Child) == [Child]
        assert member_sources(instance) == [instance, Child, Base]

    def test_builtin_bases_are_left_out(self):
        class Registry(dict):
            def lookup(self, key):
                pass

        namespace = SimpleNamespace(fn=len)

        assert lookup_chain(Registry())[1:] == [Registry]
        assert lookup_chain(namespace) == [namespace]
        assert [m.name for m in enumerate_members(namespace)] == ['fn']

    def test_closest_definition_wins(self):
        class Base:
            def run(self):
                pass

            def stop(self):
                pass

        class Child(Base):
            def run(self):
                pass

        instance = Child()
        instance.stop = len

        members = {m.name: m for m in enumerate_members(instance)}

        assert members['run'].source is Child
        assert members['stop'].source is instance
        assert members['stop'].raw is len

    def test_resolve_static_does_not_trigger_property(self):
        probe = AccessorProbe()
        cls = make_accessor_class(probe)

        member = resolve_static(cls(), 'counter')

        assert member.kind is MemberKind.ACCESSOR
        assert member.source is cls
        assert probe.getter_calls == 0
        assert resolve_static(cls(), 'missing') is None


class TestLooksLikeConstructor:
    """Which classes are worth visiting."""

    def test_class_with_public_method(self):
        class Service:
            def call(self):
                pass

        assert looks_like_constructor(Service)

    def test_class_with_static_method(self):
        class Tools:
            @staticmethod
            def helper():
                pass

        assert looks_like_constructor(Tools)

    def test_dunder_only_class(self):
        class Plain:
            def __init__(self):
                pass

        assert not looks_like_constructor(Plain)

    def test_builtin_types(self):
        assert not looks_like_constructor(dict)
        assert not looks_like_constructor(int)

    def test_non_class(self):
        assert not looks_like_constructor(lambda: None)
        assert not looks_like_constructor(SimpleNamespace())
