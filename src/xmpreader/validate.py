# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Value checks for extracted XMP properties.

Every check takes the property descriptor, a candidate value, and whether the
value is a standalone scalar (``True``) or an aggregate such as a struct that
has collected all of its members (``False``). A check only acts in the phase
it is written for and passes the value through otherwise.

A check returns the (possibly normalized) value, or None when the value is
rejected. Rejections are logged at INFO level and never raised.

See the XMP Specification Part 1 (section 8) and Part 2 (section 1.2) for the
value types.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from ._types import Check, PropertyDescriptor

logger = logging.getLogger(__name__)

_RATIONAL_RE = re.compile(r"-?\d+/(?:\d+[1-9]|[1-9]\d*)", re.ASCII)
_RATING_RE = re.compile(r"[-+]?\d*(?:\.?\d*)", re.ASCII)
_INTEGER_RE = re.compile(r"[-+]?\d+", re.ASCII)
LANG_CODE_RE = re.compile(r"[-A-Za-z0-9]{2,}", re.ASCII)

# Numeric strings as accepted by is_numeric() style checks: optional sign,
# decimal digits with an optional fraction, optional exponent.
_NUMERIC_RE = re.compile(
    r"\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?\s*", re.ASCII
)

# YYYY, YYYY-MM, YYYY-MM-DD, YYYY-MM-DDThh:mm[:ss[.s]][TZD]
_DATE_RE = re.compile(
    r"([0-3]\d{3})"
    r"(?:-([01]\d)"
    r"(?:-([0-3]\d)"
    r"(?:T([0-2]\d):([0-6]\d)"
    r"(?::([0-6]\d)(?:\.\d+)?)?"
    r"([-+]\d{2}:\d{2}|Z)?"
    r")?"
    r")?"
    r")?",
    re.ASCII,
)

# Output form of the date check (YYYY:MM:DD HH:MM:SS and its prefixes)
_EXIF_DATE_RE = re.compile(
    r"([0-3]\d{3})(?::[01]\d(?::[0-3]\d(?: [0-2]\d:[0-6]\d(?::[0-6]\d)?)?)?)?",
    re.ASCII,
)

# D,M,Sk (whole seconds) and D,M.mk (fractional minutes)
_GPS_DMS_RE = re.compile(r"(\d{1,3}),(\d{1,2}),(\d{1,2})([NWSE])", re.ASCII)
_GPS_DM_RE = re.compile(r"(\d{1,3}),(\d{1,2}(?:\.\d*)?)([NWSE])", re.ASCII)

FLASH_MEMBERS = ("Fired", "Function", "Mode", "RedEyeMode", "Return")


def _is_numeric(value: Any) -> bool:
    return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


class ValidatorSet:
    """The fixed collection of value checks, bound to a logger.

    The instance is stateless apart from its logger and may be shared
    between reader sessions.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._checks: dict[
            Check, Callable[[PropertyDescriptor, Any, bool], Any]
        ] = {
            Check.BOOLEAN: self.validate_boolean,
            Check.RATIONAL: self.validate_rational,
            Check.RATING: self.validate_rating,
            Check.INTEGER: self.validate_integer,
            Check.CLOSED: self.validate_closed,
            Check.REAL: self.validate_real,
            Check.LANG_CODE: self.validate_lang_code,
            Check.DATE: self.validate_date,
            Check.GPS: self.validate_gps,
            Check.FLASH: self.validate_flash,
        }

    def validate(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Runs the descriptor's check on a value.

        Args:
            descriptor: Descriptor of the property the value belongs to.
            value: Candidate value (text, or a member mapping for structs).
            standalone: True for a scalar leaf, False for an aggregate.

        Returns:
            The normalized value, or None if it was rejected.
        """
        if descriptor.check is None:
            return value
        return self._checks[descriptor.check](descriptor, value, standalone)

    def _reject(self, check: str, msg: str, *args: Any) -> None:
        self._logger.info(msg, *args, extra={"xmp_check": check})
        return None

    def validate_boolean(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts the literal tokens ``True`` and ``False`` only."""
        if not standalone:
            return value
        if value != "True" and value != "False":
            return self._reject(
                "validate_boolean", "Expected True or False but got %r", value
            )
        return value

    def validate_rational(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts ``numerator/denominator`` with a non-zero denominator."""
        if not standalone:
            return value
        if not isinstance(value, str) or not _RATIONAL_RE.fullmatch(value):
            return self._reject(
                "validate_rational", "Expected rational but got %r", value
            )
        return value

    def validate_rating(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts ratings from -1 to 5, pulling out-of-range values in.

        Anything below 0 becomes ``-1`` (the "rejected" rating), since values
        between -1 and 0 are not valid ratings either.
        """
        if not standalone:
            return value
        if not _is_numeric(value) or not _RATING_RE.fullmatch(value):
            return self._reject("validate_rating", "Expected rating but got %r", value)

        rating = float(value)
        if rating < 0:
            self._logger.info(
                "Rating %r too low, setting to -1 (Rejected)",
                value,
                extra={"xmp_check": "validate_rating"},
            )
            return "-1"
        if rating > 5:
            self._logger.info(
                "Rating %r too high, setting to 5",
                value,
                extra={"xmp_check": "validate_rating"},
            )
            return "5"
        return value

    def validate_integer(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts an optionally signed run of digits."""
        if not standalone:
            return value
        if not isinstance(value, str) or not _INTEGER_RE.fullmatch(value):
            return self._reject(
                "validate_integer", "Expected integer but got %r", value
            )
        return value

    def validate_closed(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts one of the descriptor's choices or an in-range integer."""
        if not standalone:
            return value

        in_range = False
        if descriptor.has_range and _is_numeric(value):
            try:
                number = int(float(value))
            except OverflowError:
                number = None
            in_range = (
                number is not None
                and descriptor.range_low <= number <= descriptor.range_high
            )

        if not in_range and value not in descriptor.choices:
            return self._reject(
                "validate_closed", "Expected closed choice, but got %r", value
            )
        return value

    def validate_real(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Accepts a number, optionally within the descriptor's range.

        ``"0"`` is a valid real.
        """
        if not standalone:
            return value
        if not _is_numeric(value):
            return self._reject("validate_real", "Expected real, but got %r", value)

        if descriptor.has_range:
            number = float(value)
            if number < descriptor.range_low or number > descriptor.range_high:
                return self._reject(
                    "validate_real",
                    "Expected value within range of %s-%s, but got %r",
                    descriptor.range_low,
                    descriptor.range_high,
                    value,
                )
        return value

    def validate_lang_code(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Loosely checks that a value looks like a BCP 47 language tag."""
        if not standalone:
            return value
        if not isinstance(value, str) or not LANG_CODE_RE.fullmatch(value):
            return self._reject(
                "validate_lang_code", "Expected Lang code but got %r", value
            )
        return value

    def validate_date(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Validates an XMP date and converts it to the (partial) EXIF form.

        Accepted inputs are ``YYYY``, ``YYYY-MM``, ``YYYY-MM-DD`` and
        ``YYYY-MM-DDThh:mm[:ss[.s]][TZD]``. Partial dates become
        ``YYYY:MM:DD`` prefixes; date-times become ``YYYY:MM:DD HH:MM[:SS]``
        with the timezone offset applied. Values already in the EXIF form
        are passed through.
        """
        if not standalone:
            return value
        if not isinstance(value, str):
            return self._reject("validate_date", "Expected date but got %r", value)

        match = _DATE_RE.fullmatch(value)
        if match is None:
            exif_match = _EXIF_DATE_RE.fullmatch(value)
            if exif_match is None:
                return self._reject(
                    "validate_date", "Expected date but got %r", value
                )
            if exif_match.group(1) == "0000":
                return self._reject("validate_date", "Invalid date (year 0): %r", value)
            return value

        year, month, day, hour, minute, second, tzd = match.groups()

        # Year 0000 shows up when programs convert between metadata formats
        # and lose the date.
        if year == "0000":
            return self._reject("validate_date", "Invalid date (year 0): %r", value)

        # Only dates with an offset go through datetime. The others are
        # reformatted as written, so "T29:69" comes out as " 29:69".
        if hour is None:
            return ":".join(part for part in (year, month, day) if part is not None)

        if tzd is None or tzd == "Z":
            result = f"{year}:{month}:{day} {hour}:{minute}"
            if second is not None:
                result += f":{second}"
            return result

        offset = timedelta(hours=int(tzd[1:3]), minutes=int(tzd[4:6]))
        if tzd[0] == "-":
            offset = -offset
        try:
            moment = datetime(
                int(year), int(month), int(day), int(hour), int(minute),
                int(second or 0),
            )
            moment += offset
        except (ValueError, OverflowError):
            return self._reject("validate_date", "Invalid date: %r", value)

        result = (
            f"{moment.year:04d}:{moment.month:02d}:{moment.day:02d}"
            f" {moment.hour:02d}:{moment.minute:02d}"
        )
        if second is not None:
            result += f":{moment.second:02d}"
        return result

    def validate_gps(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Converts a DMS GPS coordinate to signed decimal degrees.

        Accepts ``DDD,MM,SSk`` and ``DDD,MM.mmk`` where k is one of N, S,
        E, W. Numeric Python values (int or float) are passed through as
        floats; decimal strings such as ``"12.5"`` are rejected.
        """
        if not standalone:
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if not isinstance(value, str):
            return self._reject(
                "validate_gps", "Expected GPSCoordinate, but got %r", value
            )

        match = _GPS_DMS_RE.fullmatch(value)
        if match is not None:
            coord = float(int(match.group(1)))
            coord += int(match.group(2)) * (1 / 60)
            coord += int(match.group(3)) * (1 / 3600)
            if match.group(4) in ("S", "W"):
                coord = -coord
            return coord

        match = _GPS_DM_RE.fullmatch(value)
        if match is not None:
            coord = float(int(match.group(1)))
            coord += float(match.group(2)) * (1 / 60)
            if match.group(3) in ("S", "W"):
                coord = -coord
            return coord

        return self._reject(
            "validate_gps", "Expected GPSCoordinate, but got %r", value
        )

    def validate_flash(
        self, descriptor: PropertyDescriptor, value: Any, standalone: bool
    ) -> Any:
        """Packs a complete exif:Flash struct into the EXIF Flash bitfield.

        Bit 0 Fired, bits 1-2 Return, bits 3-4 Mode, bit 5 Function,
        bit 6 RedEyeMode.
        """
        if standalone:
            return value
        if not isinstance(value, dict) or any(
            value.get(member) is None for member in FLASH_MEMBERS
        ):
            return self._reject(
                "validate_flash",
                "Flash structure did not have all the required components",
            )
        try:
            returned = int(value["Return"])
            mode = int(value["Mode"])
        except (TypeError, ValueError):
            return self._reject(
                "validate_flash", "Flash structure has non-numeric Mode or Return"
            )
        return (
            (value["Fired"] == "True")
            | (returned << 1)
            | (mode << 3)
            | ((value["Function"] == "True") << 5)
            | ((value["RedEyeMode"] == "True") << 6)
        )
