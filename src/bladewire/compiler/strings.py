"""String helpers shared by the tag compilers.

These follow the casing rules of the host template engine so that emitted
parameter names line up with the ones the runtime derives itself:

    studly("foo-bar_baz")   ->  "FooBarBaz"
    camel("foo-bar")        ->  "fooBar"
    camel("foo.bar-baz")    ->  "foo.barBaz"
"""

import re

_NUMERIC = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def lcfirst(value: str) -> str:
    return value[:1].lower() + value[1:]


def studly(value: str) -> str:
    words = value.replace("-", " ").replace("_", " ").split(" ")
    return "".join(ucfirst(word) for word in words)


def camel(value: str) -> str:
    return lcfirst(studly(value))


def strip_quotes(value: str) -> str:
    """Strip one pair of surrounding quotes, if the value starts with one."""
    if value.startswith(('"', "'")):
        return value[1:-1]
    return value


def after(value: str, search: str) -> str:
    """Return everything after the first occurrence of search (or value)."""
    if search == "":
        return value
    _, sep, tail = value.partition(search)
    return tail if sep else value


def replace_first(value: str, search: str, replace: str) -> str:
    return value.replace(search, replace, 1)


def is_numeric(value: str) -> bool:
    return bool(_NUMERIC.match(value))
