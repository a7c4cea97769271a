# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for validate.py."""

import logging

import pytest

from xmpreader._types import Check, Group, PropertyDescriptor
from xmpreader.validate import ValidatorSet


def _descriptor(check: Check, **kwargs) -> PropertyDescriptor:
    return PropertyDescriptor(Group.EXIF, name="Test", check=check, **kwargs)


class TestDispatch:
    """Tests for ValidatorSet.validate."""

    def test_no_check_passes_value(self, validators: ValidatorSet) -> None:
        """Descriptors without a check keep any value."""
        descriptor = PropertyDescriptor(Group.GENERAL, name="Label")
        assert validators.validate(descriptor, "anything", True) == "anything"

    def test_dispatches_on_check(self, validators: ValidatorSet) -> None:
        """The descriptor's check decides the outcome."""
        descriptor = _descriptor(Check.INTEGER)
        assert validators.validate(descriptor, "42", True) == "42"
        assert validators.validate(descriptor, "4.2", True) is None

    def test_rejection_is_logged_with_check_name(
        self, validators: ValidatorSet, caplog
    ) -> None:
        """Rejections produce an INFO record naming the check."""
        with caplog.at_level(logging.INFO, logger="xmpreader"):
            validators.validate(_descriptor(Check.RATIONAL), "lol", True)

        records = [r for r in caplog.records if hasattr(r, "xmp_check")]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].xmp_check == "validate_rational"
        assert "lol" in records[0].getMessage()

    def test_default_logger(self) -> None:
        """A ValidatorSet without a logger still works."""
        validators = ValidatorSet()
        assert validators.validate(_descriptor(Check.BOOLEAN), "True", True) == "True"


class TestScalarPhase:
    """Scalar checks leave aggregates alone."""

    @pytest.mark.parametrize(
        "check",
        [
            Check.BOOLEAN,
            Check.RATIONAL,
            Check.RATING,
            Check.INTEGER,
            Check.CLOSED,
            Check.REAL,
            Check.LANG_CODE,
            Check.DATE,
            Check.GPS,
        ],
    )
    def test_aggregate_phase_is_noop(
        self, validators: ValidatorSet, check: Check
    ) -> None:
        """Scalar checks pass values through when not standalone."""
        value = ["not", "a", "scalar"]
        assert validators.validate(_descriptor(check), value, False) is value

    def test_flash_standalone_is_noop(self, validators: ValidatorSet) -> None:
        """The flash check only runs on the complete struct."""
        assert validators.validate(_descriptor(Check.FLASH), "garbage", True) == (
            "garbage"
        )


class TestBoolean:
    """Tests for validate_boolean."""

    @pytest.mark.parametrize("value", ["True", "False"])
    def test_accepts_literals(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.BOOLEAN), value, True) == value

    @pytest.mark.parametrize("value", ["true", "1", "", "FALSE", "yes"])
    def test_rejects_others(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.BOOLEAN), value, True) is None


class TestRational:
    """Tests for validate_rational."""

    @pytest.mark.parametrize("value", ["1/2", "-3/4", "0/10", "2/10", "1/001", "300/1"])
    def test_accepts_rationals(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.RATIONAL), value, True) == value

    @pytest.mark.parametrize("value", ["lol", "1/0", "1/", "/2", "1.5/2", "1/-2", "2"])
    def test_rejects_others(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.RATIONAL), value, True) is None


class TestRating:
    """Tests for validate_rating."""

    @pytest.mark.parametrize("value", ["-1", "0", "1", "2", "3", "4", "5"])
    def test_valid_ratings_unchanged(
        self, validators: ValidatorSet, value: str
    ) -> None:
        assert validators.validate(_descriptor(Check.RATING), value, True) == value

    def test_too_low_becomes_rejected(
        self, validators: ValidatorSet, caplog
    ) -> None:
        """Ratings below zero are set to -1."""
        with caplog.at_level(logging.INFO, logger="xmpreader"):
            result = validators.validate(_descriptor(Check.RATING), "-5", True)

        assert result == "-1"
        assert "setting to -1 (Rejected)" in caplog.text

    def test_fraction_below_zero_becomes_rejected(
        self, validators: ValidatorSet
    ) -> None:
        assert validators.validate(_descriptor(Check.RATING), "-0.5", True) == "-1"

    def test_too_high_is_clamped(self, validators: ValidatorSet) -> None:
        assert validators.validate(_descriptor(Check.RATING), "6", True) == "5"

    def test_non_numeric_rejected(self, validators: ValidatorSet) -> None:
        """Non-numeric ratings are dropped, not clamped."""
        assert validators.validate(_descriptor(Check.RATING), "lol", True) is None


class TestInteger:
    """Tests for validate_integer."""

    @pytest.mark.parametrize("value", ["0", "42", "-7", "+12", "007"])
    def test_accepts_integers(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.INTEGER), value, True) == value

    @pytest.mark.parametrize("value", ["1.5", "", "one", "1e3", "- 1"])
    def test_rejects_others(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.INTEGER), value, True) is None


class TestClosed:
    """Tests for validate_closed."""

    @pytest.fixture
    def ranged(self) -> PropertyDescriptor:
        return _descriptor(Check.CLOSED, range_low=6, range_high=8)

    @pytest.mark.parametrize("value", ["6", "7", "8"])
    def test_range_inclusive(
        self, validators: ValidatorSet, ranged: PropertyDescriptor, value: str
    ) -> None:
        assert validators.validate(ranged, value, True) == value

    @pytest.mark.parametrize("value", ["5", "9", "abc"])
    def test_outside_range(
        self, validators: ValidatorSet, ranged: PropertyDescriptor, value: str
    ) -> None:
        assert validators.validate(ranged, value, True) is None

    def test_range_truncates_to_integer(
        self, validators: ValidatorSet, ranged: PropertyDescriptor
    ) -> None:
        """Numbers are cast to integer before the range comparison."""
        assert validators.validate(ranged, "8.9", True) == "8.9"

    def test_choices(self, validators: ValidatorSet) -> None:
        descriptor = _descriptor(Check.CLOSED, choices=frozenset({"T", "M"}))
        assert validators.validate(descriptor, "T", True) == "T"
        assert validators.validate(descriptor, "X", True) is None

    def test_choices_and_range(self, validators: ValidatorSet) -> None:
        """Either the choice set or the range may admit a value."""
        descriptor = _descriptor(
            Check.CLOSED, range_low=0, range_high=6, choices=frozenset({"255"})
        )
        assert validators.validate(descriptor, "255", True) == "255"
        assert validators.validate(descriptor, "3", True) == "3"
        assert validators.validate(descriptor, "7", True) is None


class TestReal:
    """Tests for validate_real."""

    def test_zero_is_numeric(self, validators: ValidatorSet) -> None:
        """A literal zero is a valid real."""
        assert validators.validate(_descriptor(Check.REAL), "0", True) == "0"

    @pytest.mark.parametrize("value", ["1.5", "-0.25", "360", "1e2"])
    def test_accepts_numbers(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.REAL), value, True) == value

    def test_rejects_non_numeric(self, validators: ValidatorSet) -> None:
        assert validators.validate(_descriptor(Check.REAL), "north", True) is None

    def test_range(self, validators: ValidatorSet) -> None:
        descriptor = _descriptor(Check.REAL, range_low=-90, range_high=90)
        assert validators.validate(descriptor, "-90", True) == "-90"
        assert validators.validate(descriptor, "90.0", True) == "90.0"
        assert validators.validate(descriptor, "90.5", True) is None
        assert validators.validate(descriptor, "-91", True) is None


class TestLangCode:
    """Tests for validate_lang_code."""

    @pytest.mark.parametrize("value", ["en", "en-US", "x-default", "de-1996"])
    def test_accepts_codes(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.LANG_CODE), value, True) == value

    @pytest.mark.parametrize("value", ["e", "en_US", "", "en US"])
    def test_rejects_others(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.LANG_CODE), value, True) is None


class TestDate:
    """Tests for validate_date."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1992", "1992"),
            ("1992-05", "1992:05"),
            ("1992-05-13", "1992:05:13"),
            ("2001-02-03T04:05", "2001:02:03 04:05"),
            ("2001-02-03T04:05:06", "2001:02:03 04:05:06"),
            ("2001-02-03T04:05:06Z", "2001:02:03 04:05:06"),
            ("2001-02-03T04:05:06.789Z", "2001:02:03 04:05:06"),
            ("1982-12-15T20:12+02:30", "1982:12:15 22:42"),
            ("1982-12-15T01:12-02:30", "1982:12:14 22:42"),
            ("2001-02-03T04:05:06+01:00", "2001:02:03 05:05:06"),
            ("1999-12-31T23:30+01:00", "2000:01:01 00:30"),
        ],
    )
    def test_conversion(
        self, validators: ValidatorSet, value: str, expected: str
    ) -> None:
        assert validators.validate(_descriptor(Check.DATE), value, True) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "0000-01-01",
            "0000",
            "0000:00:00 00:00:00",
            "lol",
            "92",
            "2001-02-30T10:00+01:00",
            "2001-02-03 04:05",
            "2001-02-03T04",
        ],
    )
    def test_rejected(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.DATE), value, True) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2001-02-03T29:69", "2001:02:03 29:69"),
            ("2001-02-03T29:69Z", "2001:02:03 29:69"),
            ("2001-13-39", "2001:13:39"),
        ],
    )
    def test_fields_without_offset_not_range_checked(
        self, validators: ValidatorSet, value: str, expected: str
    ) -> None:
        """Only dates shifted by an offset go through datetime."""
        descriptor = _descriptor(Check.DATE)
        assert validators.validate(descriptor, value, True) == expected
        assert validators.validate(descriptor, "2001-02-03T29:69+01:00", True) is None

    @pytest.mark.parametrize(
        "value",
        ["1982:12:15 22:42", "1982:12:14 22:42:10", "1992:05", "1992"],
    )
    def test_idempotent(self, validators: ValidatorSet, value: str) -> None:
        """Normalized dates come back unchanged."""
        descriptor = _descriptor(Check.DATE)
        once = validators.validate(descriptor, value, True)
        assert once == value
        assert validators.validate(descriptor, once, True) == once


class TestGps:
    """Tests for validate_gps."""

    def test_north(self, validators: ValidatorSet) -> None:
        result = validators.validate(_descriptor(Check.GPS), "1,1,1N", True)
        assert result == pytest.approx(1.0169444444444444, rel=1e-12)

    def test_south(self, validators: ValidatorSet) -> None:
        result = validators.validate(_descriptor(Check.GPS), "1,1,1S", True)
        assert result == pytest.approx(-1.0169444444444444, rel=1e-12)

    def test_fractional_minutes(self, validators: ValidatorSet) -> None:
        result = validators.validate(_descriptor(Check.GPS), "88,30.5W", True)
        assert result == pytest.approx(-(88 + 30.5 / 60), rel=1e-12)

    def test_east(self, validators: ValidatorSet) -> None:
        result = validators.validate(_descriptor(Check.GPS), "12,30E", True)
        assert result == pytest.approx(12.5, rel=1e-12)

    @pytest.mark.parametrize("value", ["lol", "1,1,1", "1,1,1X", "1000,1,1N", ""])
    def test_rejected(self, validators: ValidatorSet, value: str) -> None:
        assert validators.validate(_descriptor(Check.GPS), value, True) is None

    def test_idempotent(self, validators: ValidatorSet) -> None:
        """Numeric degrees pass through unchanged."""
        descriptor = _descriptor(Check.GPS)
        once = validators.validate(descriptor, "1,1,1S", True)
        assert validators.validate(descriptor, once, True) == once

    def test_only_python_numbers_pass(self, validators: ValidatorSet) -> None:
        """Decimal strings are not GPS coordinates."""
        descriptor = _descriptor(Check.GPS)
        assert validators.validate(descriptor, 12, True) == 12.0
        assert validators.validate(descriptor, 12.5, True) == 12.5
        assert validators.validate(descriptor, "12.5", True) is None
        assert validators.validate(descriptor, True, True) is None


class TestFlash:
    """Tests for validate_flash."""

    def test_packs_bitfield(self, validators: ValidatorSet) -> None:
        value = {
            "Fired": "True",
            "Function": "True",
            "Mode": 1,
            "RedEyeMode": "True",
            "Return": 1,
        }
        assert validators.validate(_descriptor(Check.FLASH), value, False) == 107

    def test_packs_strings(self, validators: ValidatorSet) -> None:
        value = {
            "Fired": "True",
            "Function": "False",
            "Mode": "1",
            "RedEyeMode": "False",
            "Return": "0",
        }
        assert validators.validate(_descriptor(Check.FLASH), value, False) == 9

    @pytest.mark.parametrize(
        "missing", ["Fired", "Function", "Mode", "RedEyeMode", "Return"]
    )
    def test_missing_member_rejected(
        self, validators: ValidatorSet, missing: str
    ) -> None:
        value = {
            "Fired": "True",
            "Function": "True",
            "Mode": "1",
            "RedEyeMode": "True",
            "Return": "1",
        }
        del value[missing]
        assert validators.validate(_descriptor(Check.FLASH), value, False) is None
