# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Read-only lookup of extractable XMP properties.

A :class:`Registry` is built once from a catalog table and never mutated
afterwards, so a single instance can be shared by any number of reader
sessions, including sessions running in different threads.
"""

import dataclasses
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ._types import PropertyDescriptor, Shape
from .schema import PROPERTIES


class Registry:
    """Immutable ``(namespace URI, local name) -> PropertyDescriptor`` map."""

    def __init__(
        self, table: Mapping[str, Mapping[str, PropertyDescriptor]] = PROPERTIES
    ) -> None:
        namespaces = {}
        for uri, props in table.items():
            resolved = {}
            for local, descriptor in props.items():
                if descriptor.name is None:
                    descriptor = dataclasses.replace(descriptor, name=local)
                resolved[local] = descriptor
            namespaces[uri] = MappingProxyType(resolved)
        self._namespaces = MappingProxyType(namespaces)
        _check_struct_children(self._namespaces)

    def lookup(self, namespace: str, local_name: str) -> PropertyDescriptor | None:
        """Returns the descriptor for a property, or None if not extracted."""
        props = self._namespaces.get(namespace)
        if props is None:
            return None
        return props.get(local_name)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self.lookup(*key) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for uri, props in self._namespaces.items():
            for local in props:
                yield uri, local

    def __len__(self) -> int:
        return sum(len(props) for props in self._namespaces.values())


def _check_struct_children(
    namespaces: Mapping[str, Mapping[str, PropertyDescriptor]],
) -> None:
    """Ensures every struct member is itself a struct-part property.

    Struct members are looked up in the namespace of their struct.

    Raises:
        ValueError: If the table is inconsistent.
    """
    for uri, props in namespaces.items():
        for local, descriptor in props.items():
            if descriptor.shape not in (Shape.STRUCT, Shape.BAGSTRUCT):
                continue
            if not descriptor.children:
                raise ValueError(f"Struct {uri}{local} declares no members")
            for child in descriptor.children:
                member = props.get(child)
                if member is None or not member.struct_part:
                    raise ValueError(
                        f"Member {child} of {uri}{local} is not a struct part"
                    )


DEFAULT_REGISTRY = Registry()
