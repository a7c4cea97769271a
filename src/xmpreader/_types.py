# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Types, constants, and enums shared by the registry and the reader."""

from dataclasses import dataclass
from enum import Enum

NS_RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
NS_XML = "http://www.w3.org/XML/1998/namespace"


class Group(Enum):
    """Output groups a property is filed under."""

    GENERAL = "general"
    EXIF = "exif"
    DEPRECATED = "deprecated"
    SPECIAL = "special"

    @property
    def tag(self) -> str:
        """Group key used in result mappings (e.g. ``xmp-exif``)."""
        return f"xmp-{self.value}"


GROUP_TAGS = tuple(group.tag for group in Group)

# Which group wins when two groups carry the same output name.
DEFAULT_GROUP_PRECEDENCE = (
    Group.SPECIAL,
    Group.GENERAL,
    Group.EXIF,
    Group.DEPRECATED,
)


class Shape(Enum):
    """RDF container shapes a property can take."""

    SIMPLE = "simple"
    SEQ = "seq"
    BAG = "bag"
    LANG = "lang"
    STRUCT = "struct"
    BAGSTRUCT = "bagstruct"


class Check(Enum):
    """Identifiers of the value checks in :class:`~xmpreader.validate.ValidatorSet`."""

    BOOLEAN = "boolean"
    RATIONAL = "rational"
    RATING = "rating"
    INTEGER = "integer"
    CLOSED = "closed"
    REAL = "real"
    LANG_CODE = "lang_code"
    DATE = "date"
    GPS = "gps"
    FLASH = "flash"


@dataclass(frozen=True)
class PropertyDescriptor:
    """Describes one extractable XMP property.

    Attributes:
        group: Output group the value is filed under.
        shape: RDF shape the property is expected to have.
        name: Canonical output name. None means the XML local name.
        check: Value check applied to the property, if any.
        choices: Allowed values for closed-choice properties.
        range_low: Lower inclusive bound for numeric properties.
        range_high: Upper inclusive bound for numeric properties.
        children: Allowed member local names of a struct.
        struct_part: The property may only appear inside a struct.
    """

    group: Group
    shape: Shape = Shape.SIMPLE
    name: str | None = None
    check: Check | None = None
    choices: frozenset[str] = frozenset()
    range_low: float | None = None
    range_high: float | None = None
    children: frozenset[str] = frozenset()
    struct_part: bool = False

    @property
    def has_range(self) -> bool:
        return self.range_low is not None and self.range_high is not None
