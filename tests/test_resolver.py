"""Tests for walking chains to records and namespaces."""

from __future__ import annotations

from cellcomplete.environment import Environment
from cellcomplete.resolver import is_namespace_family, resolve, walk_namespace
from cellcomplete.settings import DEFAULT_SETTINGS
from cellcomplete.tokenizer import tokenize
from cellcomplete.values import Bindings, NamespaceRef, Record, Scalar


def run(prefix, registry, bindings=None, env=None):
    return resolve(
        tokenize(prefix),
        Bindings.from_dict(bindings or {}),
        env or Environment(),
        registry,
        DEFAULT_SETTINGS,
    )


# =============================================================================
# Namespace families
# =============================================================================


def test_loaded_namespace_is_family(registry):
    assert is_namespace_family(registry, "Enum")


def test_prefix_of_loaded_namespace_is_family(registry):
    """App.Sublevel is only reachable through App.Sublevel.LevelA.LevelB."""
    assert is_namespace_family(registry, "App.Sublevel")


def test_partial_segment_is_not_family(registry):
    assert not is_namespace_family(registry, "App.Sub")


def test_walk_stops_at_first_missing_segment(registry):
    assert walk_namespace(registry, "App", ("Nope", "LevelA")) is None


def test_walk_from_root(registry):
    assert walk_namespace(registry, "", ("IO", "ANSI")) == NamespaceRef("IO.ANSI")


# =============================================================================
# Qualified chains
# =============================================================================


class TestQualified:
    def test_plain_namespace(self, registry):
        assert run("Enum.ma", registry) == NamespaceRef("Enum")

    def test_nested_namespace(self, registry):
        assert run("App.Sublevel.LevelA.", registry) == NamespaceRef("App.Sublevel.LevelA")

    def test_alias_expands(self, registry):
        env = Environment(aliases={"Sys": "System"})
        assert run("Sys.ve", registry, env=env) == NamespaceRef("System")

    def test_root_proxy_is_empty_prefix(self, registry):
        assert run("Elixir.En", registry) == NamespaceRef("")

    def test_root_proxy_then_namespace(self, registry):
        assert run("Elixir.Enum.ma", registry) == NamespaceRef("Enum")

    def test_unknown_namespace(self, registry):
        assert run("Nope.x", registry) is None

    def test_atom_style_literal(self, registry):
        assert run(":zlib.gz", registry) == NamespaceRef("zlib")

    def test_atom_style_unknown(self, registry):
        assert run(":nope.gz", registry) is None


# =============================================================================
# Variable-rooted chains
# =============================================================================


class TestVariable:
    def test_record_root(self, registry):
        target = run("map.f", registry, {"map": {"foo": 1, "bar": 2}})
        assert isinstance(target, Record)
        assert set(target.fields) == {"foo", "bar"}

    def test_nested_record(self, registry):
        target = run("map.nested.de", registry, {"map": {"nested": {"deeply": {"x": 1}}}})
        assert isinstance(target, Record)
        assert "deeply" in target.fields

    def test_missing_field(self, registry):
        assert run("map.nope.x", registry, {"map": {"foo": 1}}) is None

    def test_scalar_root(self, registry):
        assert run("num.x", registry, {"num": 42}) is None

    def test_scalar_field_mid_chain(self, registry):
        assert run("map.foo.x", registry, {"map": {"foo": 1}}) is None

    def test_unbound_root(self, registry):
        assert run("x.Foo", registry) is None

    def test_namespace_binding_continues_as_namespace(self, registry):
        bindings = {"mod": {"io": NamespaceRef("IO")}}
        assert run("mod.io.ANSI.", registry, bindings) == NamespaceRef("IO.ANSI")

    def test_namespace_binding_unknown_segment(self, registry):
        bindings = {"mod": {"io": NamespaceRef("IO")}}
        assert run("mod.io.Nope.", registry, bindings) is None

    def test_hidden_binding_does_not_resolve(self, registry):
        bindings = Bindings.from_dict({"_tmp": {"a": 1}}, hidden=["_tmp"])
        chain = tokenize("_tmp.a")
        assert resolve(chain, bindings, Environment(), registry, DEFAULT_SETTINGS) is None


def test_bare_chain_resolves_to_nothing(registry):
    assert run("len", registry) is None


def test_scalar_holding_namespace_name(registry):
    """A Scalar wrapping a namespace name is not a namespace reference."""
    assert run("name.x", registry, {"name": Scalar("Enum")}) is None
