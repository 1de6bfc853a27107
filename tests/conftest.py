"""Shared fixtures: a small core library served by a StaticRegistry."""

from __future__ import annotations

import pytest

from cellcomplete.registry import Namespace, StaticRegistry, Symbol, SymbolKind


def fn(name: str, arity: int, **kw) -> Symbol:
    return Symbol(name=name, arity=arity, kind=SymbolKind.FUNCTION, **kw)


def macro(name: str, arity: int, **kw) -> Symbol:
    return Symbol(name=name, arity=arity, kind=SymbolKind.MACRO, **kw)


def typ(name: str, arity: int, **kw) -> Symbol:
    return Symbol(name=name, arity=arity, kind=SymbolKind.TYPE, **kw)


def ns(name: str, *symbols: Symbol, doc: str | None = None) -> Namespace:
    return Namespace(name=name, documentation=doc, symbols=symbols)


CORE = [
    ns(
        "Kernel",
        fn(
            "length", 1,
            signature="length(list)",
            documentation="Returns the length of `list`.\n\nAllowed in guard tests.",
            spec="@spec length(list()) :: non_neg_integer()",
        ),
        fn("node", 0, signature="node()", documentation="Returns the current node."),
        fn("node", 1, signature="node(arg)", documentation="Returns the node of arg."),
        fn("not", 1, signature="not(value)", documentation="Strictly boolean not."),
        fn("is_binary", 1, signature="is_binary(term)", documentation="Is term a binary?"),
        macro(
            "is_nil", 1,
            signature="is_nil(term)",
            documentation="Returns `true` if `term` is `nil`, `false` otherwise.",
        ),
        macro(
            "put_in", 2,
            signature="put_in(path, value)",
            documentation="Puts a value in a nested structure via the given `path`.",
        ),
        fn(
            "put_in", 3,
            signature="put_in(data, keys, value)",
            documentation="Puts a value in a nested structure.\n\nUses the `Access` module.",
            spec="@spec put_in(Access.t(), [term(), ...], term()) :: Access.t()",
        ),
        fn("__info__", 1),
        fn("secret_helper", 0, hidden=True),
        doc="Kernel is the default environment.\n\nIt is imported everywhere.",
    ),
    ns(
        "Kernel.SpecialForms",
        macro(
            "quote", 2,
            signature="quote(opts, block)",
            documentation="Gets the representation of any expression.\n\n## Examples",
        ),
        macro("length", 1, signature="length(form)", documentation="Not really a special form."),
        doc="Special forms are the basic building blocks.",
    ),
    ns(
        "Enum",
        fn("all?", 1, signature="all?(enumerable)", documentation="Truthy check."),
        fn("all?", 2, signature="all?(enumerable, fun)", documentation="Truthy check with fun."),
        fn(
            "concat", 1,
            signature="concat(enumerables)",
            documentation=(
                "Given an enumerable of enumerables, concatenates the `enumerables` into\n"
                "a single list.\n\n## Examples\n\n    iex> Enum.concat([[1], [2]])"
            ),
            spec="@spec concat(t()) :: t()",
        ),
        fn(
            "concat", 2,
            signature="concat(left, right)",
            documentation=(
                "Concatenates the enumerable on the `right` with the enumerable on the\n"
                "`left`."
            ),
            spec="@spec concat(t(), t()) :: t()",
        ),
        fn("join", 1),
        fn(
            "join", 2,
            signature='join(enumerable, joiner \\\\ "")',
            documentation=(
                "Joins the given `enumerable` into a string using `joiner` as a\n"
                "separator.\n\nIf `joiner` is not passed at all, it defaults to an empty string."
            ),
            spec="@spec join(t(), String.t()) :: String.t()",
            default_arities=(1,),
        ),
        fn("map", 2, signature="map(enumerable, fun)", documentation="Maps."),
        fn("take", 2, signature="take(enumerable, amount)", documentation="Takes."),
        fn("take_every", 2, signature="take_every(enumerable, nth)", documentation="Takes every."),
        fn("take_while", 2, signature="take_while(enumerable, fun)", documentation="Takes while."),
        doc="Provides a set of algorithms to work with enumerables.\n\nIn Elixir, ...",
    ),
    ns("Enumerable", doc="Enumerable protocol used by `Enum` and `Stream` modules."),
    ns(
        "System",
        fn(
            "version", 0,
            signature="version()",
            documentation="Elixir version information.\n\nReturns Elixir's version as binary.",
            spec="@spec version() :: String.t()",
        ),
        fn("halt", 1, signature="halt(status)", documentation="Halts the runtime."),
        doc="The System module provides functions that interact directly with the VM.",
    ),
    ns("IO", fn("puts", 1, signature="puts(item)", documentation="Writes item."), doc="Functions handling IO."),
    ns("IO.ANSI", doc="Functionality to render ANSI escape sequences.\n\nMore details."),
    ns(
        "List",
        fn("to_integer", 1, signature="to_integer(charlist)", documentation="Parses."),
        fn("to_integer", 2, signature="to_integer(charlist, base)", documentation="Parses in base."),
        doc="Linked lists.",
    ),
    ns(
        "GenServer",
        typ("from", 0, documentation="Tuple describing the client of a call request.\n\nMore."),
        typ("name", 0, documentation="The GenServer name."),
        doc="A behaviour module for implementing the server of a client-server relation.",
    ),
    ns(
        "Protocol",
        macro("derive", 2, signature="derive(protocol, module)", documentation="Derives."),
        macro("derive", 3, signature="derive(protocol, module, options)", documentation="Derives with options."),
        doc="Reference and functions for working with protocols.",
    ),
    ns("Access", doc="Key-based access to data structures.\n\nThe Access module ..."),
    ns("App.Sublevel.LevelA.LevelB"),
    ns("App.Unicodé"),
    ns(
        "lists",
        fn("map", 2),
        fn("mapfoldl", 3),
        fn("mapfoldr", 3),
        fn(
            "max", 1,
            documentation=(
                "Returns the first element of List that compares greater than or equal "
                "to all other elements of List."
            ),
            spec="@spec max(list) :: max\nwhen list: [t, ...],\n     max: t",
        ),
        doc="This module contains functions for list processing.",
    ),
    ns("user"),
    ns("user_drv"),
    ns("user_sup"),
    ns("zlib", fn("gzip", 1, documentation="Compresses data with gz headers and checksum.")),
    ns(
        "file",
        typ("name", 0, documentation="A file name."),
        typ("name_all", 0, documentation="A file name, raw or not."),
    ),
]


@pytest.fixture
def core_namespaces():
    return list(CORE)


@pytest.fixture
def registry(core_namespaces):
    return StaticRegistry(core_namespaces)

