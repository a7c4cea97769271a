# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Storage for values extracted by a reader session."""

import copy
import logging
from collections.abc import Iterable
from typing import Any

from ._types import DEFAULT_GROUP_PRECEDENCE, Group

logger = logging.getLogger(__name__)

# Bag-structs flattened into per-member general lists, with the suffix used
LOCATION_SUFFIXES = {
    "LocationShown": "Dest",
    "LocationCreated": "Created",
}


class ResultStore:
    """Grouped ``{group: {name: value}}`` mapping filled by a reader.

    Later writes to the same name overwrite earlier ones, so successive
    documents accumulate into one store.
    """

    def __init__(self) -> None:
        self._groups: dict[Group, dict[str, Any]] = {}

    def set(self, group: Group, name: str, value: Any) -> None:
        self._groups.setdefault(group, {})[name] = value

    def get(self, group: Group, name: str, default: Any = None) -> Any:
        return self._groups.get(group, {}).get(name, default)

    def __contains__(self, key: tuple[Group, str]) -> bool:
        group, name = key
        return name in self._groups.get(group, {})

    def __len__(self) -> int:
        return sum(len(values) for values in self._groups.values())

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Returns a copy of the raw store keyed by group tag.

        Includes the internal ``xmp-special`` group.
        """
        return {
            group.tag: copy.deepcopy(values)
            for group, values in self._groups.items()
            if values
        }

    def flatten(
        self, precedence: Iterable[Group] = DEFAULT_GROUP_PRECEDENCE
    ) -> dict[str, Any]:
        """Merges all groups into a single ``{name: value}`` mapping.

        Args:
            precedence: Groups from highest to lowest priority. When two
                groups hold the same name, the earlier group wins. Groups
                not listed are left out.

        Returns:
            Flat mapping of property names to values.
        """
        flat: dict[str, Any] = {}
        for group in reversed(tuple(precedence)):
            flat.update(copy.deepcopy(self._groups.get(group, {})))
        return flat

    def post_processed(self) -> dict[str, dict[str, Any]]:
        """Returns the store as callers see it.

        Special values are folded into the public groups and then removed:
        the author's position is prefixed to the first creator, location
        bag-structs become per-member lists, and the GPS altitude rational
        becomes a signed float.
        """
        data = self.as_dict()
        special = data.pop(Group.SPECIAL.tag, {})
        general = data.get(Group.GENERAL.tag, {})
        exif = data.get(Group.EXIF.tag, {})

        position = special.get("AuthorsPosition")
        artists = general.get("Artist")
        if isinstance(position, str) and isinstance(artists, list) and artists:
            # Only the first creator gets the position
            artists[0] = f"{position}, {artists[0]}"

        for struct_name, suffix in LOCATION_SUFFIXES.items():
            locations = special.get(struct_name)
            if not isinstance(locations, list):
                continue
            for location in locations:
                if not isinstance(location, dict):
                    continue
                for field, value in location.items():
                    general.setdefault(field + suffix, []).append(value)

        if "GPSAltitude" in exif:
            altitude = _rational_to_float(exif["GPSAltitude"])
            if altitude is None:
                logger.debug("Dropping unusable GPSAltitude %r", exif["GPSAltitude"])
                del exif["GPSAltitude"]
            else:
                if exif.get("GPSAltitudeRef") == "1":
                    altitude = -altitude
                exif["GPSAltitude"] = altitude
        exif.pop("GPSAltitudeRef", None)

        if general:
            data[Group.GENERAL.tag] = general
        return {tag: values for tag, values in data.items() if values}


def _rational_to_float(value: Any) -> float | None:
    if not isinstance(value, str):
        return None
    numerator, sep, denominator = value.partition("/")
    if not sep:
        return None
    try:
        return int(numerator) / int(denominator)
    except (ValueError, ZeroDivisionError):
        return None
