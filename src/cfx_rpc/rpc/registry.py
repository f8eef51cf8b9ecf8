"""
Method registry.

A ``MethodDescriptor`` declares one remote method: its wire name, an
optional alias, positional request formatters, a response formatter, an
optional before-hook and a diagnostic-only marker. A ``MethodRegistry`` is
filled once and is read-only afterwards, so it can be shared by concurrent
dispatches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from cfx_rpc.errors import UnknownMethodError

Formatter = Callable[[Any], Any]
BeforeHook = Callable[..., None]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_python_name(name: str) -> str:
    """
    Derive the Python attribute name of a wire method or alias.

    >>> to_python_name("cfx_getBalance")
    'get_balance'
    >>> to_python_name("cfx_getPoSEconomics")
    'get_pos_economics'
    """
    # drop the namespace prefix (cfx_, debug_, txpool_)
    rest = name.split("_", 1)[1] if "_" in name else name
    rest = rest.replace("PoS", "Pos")
    return _CAMEL_BOUNDARY.sub("_", rest).lower()


@dataclass(frozen=True)
class MethodDescriptor:
    """
    Declaration of one remote method.

    Attributes:
        method: Wire method name (e.g. ``cfx_getBalance``).
        alias: Optional extra name (e.g. ``getGasPrice``).
        request_formatters: Formatter per positional argument.
        response_formatter: Applied to the raw result.
        before_hook: Receives the raw positional arguments; may raise.
        debug: Informational marker for diagnostic-only methods.
    """

    method: str
    alias: Optional[str] = None
    request_formatters: Tuple[Formatter, ...] = ()
    response_formatter: Optional[Formatter] = None
    before_hook: Optional[BeforeHook] = None
    debug: bool = False
    name: str = field(init=False)
    alias_name: Optional[str] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_formatters", tuple(self.request_formatters))
        object.__setattr__(self, "name", to_python_name(self.method))
        object.__setattr__(self, "alias_name", to_python_name(self.alias) if self.alias else None)

    @property
    def names(self) -> List[str]:
        """Every name the descriptor is reachable under."""
        names = [self.name, self.method]
        if self.alias:
            names.extend(n for n in (self.alias_name, self.alias) if n not in names)
        return names


class MethodRegistry:
    """
    Name-to-descriptor mapping, built exactly once.

    Each descriptor is reachable by its Python name, its wire name and,
    when it has one, its alias; all resolve to the same instance.
    """

    def __init__(self, descriptors: Optional[Iterable[MethodDescriptor]] = None) -> None:
        self._by_name: Dict[str, MethodDescriptor] = {}
        self._descriptors: List[MethodDescriptor] = []
        self._sealed = False
        if descriptors is not None:
            self.register(descriptors)

    def register(self, descriptors: Iterable[MethodDescriptor]) -> None:
        """
        Register all descriptors and seal the registry.

        Raises:
            RuntimeError: If the registry was already populated.
            ValueError: If two descriptors claim the same name.
        """
        if self._sealed:
            raise RuntimeError("MethodRegistry.register may only be called once")

        by_name: Dict[str, MethodDescriptor] = {}
        ordered: List[MethodDescriptor] = []
        for descriptor in descriptors:
            for name in descriptor.names:
                if name in by_name and by_name[name] is not descriptor:
                    raise ValueError(f"Duplicate RPC method name: {name} ({descriptor.method})")
                by_name[name] = descriptor
            ordered.append(descriptor)

        self._by_name = by_name
        self._descriptors = ordered
        self._sealed = True

    def lookup(self, name: str) -> MethodDescriptor:
        """
        Resolve a name to its descriptor.

        Raises:
            UnknownMethodError: If no descriptor has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownMethodError(name) from None

    def names(self) -> List[str]:
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[MethodDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
