"""Type naming helpers for string type keys.

String keys name a class by ``module.QualName`` or bare ``QualName``.
Backslash-separated names (``\\app\\Controller``) are accepted and
normalized to dotted form.

Example:
    >>> normalize_type_name("\\\\app\\\\Controller")
    'app.Controller'
    >>> "ValueError" in type_names(KeyError)
    False
    >>> "LookupError" in type_names(KeyError)
    True
"""

from __future__ import annotations

from functools import lru_cache


def normalize_type_name(name: str) -> str:
    """Normalize a type name to dotted form without a leading separator."""
    return name.strip().replace("\\", ".").lstrip(".")


def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for a class (bare name for builtins)."""
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", cls.__name__)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


@lru_cache(maxsize=1024)
def type_names(cls: type) -> frozenset[str]:
    """All names a string key may use to match ``cls`` or one of its ancestors.

    Includes the dotted and bare qualified names of every class in the MRO.
    """
    names: set[str] = set()
    for klass in cls.__mro__:
        qualname = getattr(klass, "__qualname__", klass.__name__)
        names.add(qualname)
        names.add(f"{klass.__module__}.{qualname}")
    return frozenset(names)
