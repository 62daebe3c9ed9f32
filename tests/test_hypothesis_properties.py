"""Property-based tests using Hypothesis.

This module contains property-based tests that verify invariants
of the validation pipeline, the formatters, the format compiler and
zone matching.
"""

from __future__ import annotations

import re
from dataclasses import replace

import hypothesis.strategies as st
from hypothesis import HealthCheck, given, settings

from ryandata_intl_address.data import get_default_metadata_source
from ryandata_intl_address.formatting import DefaultFormatter, PlainOutput, compile_format
from ryandata_intl_address.models import (
    Address,
    AddressErrorType,
    AddressField,
    order_fields,
)
from ryandata_intl_address.models.address import FIELD_ATTRIBUTES
from ryandata_intl_address.validation import validate
from ryandata_intl_address.zones import ExactMatcher, PostCodeRange, Territory, Zone
from tests.strategies import (
    address_with_fields_strategy,
    blank_value_strategy,
    country_code_strategy,
    display_address_strategy,
    nested_ranges_strategy,
    post_code_range_strategy,
    territory_strategy,
)

SOURCE = get_default_metadata_source()


# =============================================================================
# Validation Properties
# =============================================================================


class TestRequiredFieldProperties:
    """Property tests for the required and allowed field checks."""

    @given(address_with_fields_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_missing_fields_are_exactly_the_unset_required_fields(
        self, case: tuple[Address, frozenset[AddressField]]
    ) -> None:
        """Every required field that was not filled in is reported, and nothing else."""
        address, fields = case
        country = SOURCE.get_country(address.country)
        expected = tuple(order_fields(country.required_fields - fields))

        error = validate(address, source=SOURCE)
        missing = error.get(AddressErrorType.MISSING_REQUIRED_FIELDS) if error else None

        if expected:
            assert missing is not None
            assert missing.fields == expected
        else:
            assert missing is None

    @given(address_with_fields_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_unsupported_fields_are_exactly_the_disallowed_fields(
        self, case: tuple[Address, frozenset[AddressField]]
    ) -> None:
        """Every filled-in field the format does not show is reported, and nothing else."""
        address, fields = case
        country = SOURCE.get_country(address.country)
        expected = tuple(order_fields(fields - country.allowed_fields))

        error = validate(address, source=SOURCE)
        unsupported = error.get(AddressErrorType.UNSUPPORTED_FIELDS) if error else None

        if expected:
            assert unsupported is not None
            assert unsupported.fields == expected
        else:
            assert unsupported is None

    @given(country_code_strategy(), st.data())
    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    def test_blank_required_fields_are_missing(
        self, country_code: str, data: st.DataObject
    ) -> None:
        """Whitespace-only values never satisfy a required field."""
        country = SOURCE.get_country(country_code)
        values: dict[str, object] = {"country": country_code}
        for field in country.required_fields:
            blank = data.draw(blank_value_strategy())
            is_street = field is AddressField.STREET_ADDRESS
            values[FIELD_ATTRIBUTES[field]] = (blank,) if is_street else blank

        error = validate(Address.model_validate(values), source=SOURCE)
        assert error is not None
        missing = error.get(AddressErrorType.MISSING_REQUIRED_FIELDS)
        assert missing is not None
        assert missing.fields == tuple(order_fields(country.required_fields))

    @given(address_with_fields_strategy())
    @settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
    def test_known_country_is_never_rejected(
        self, case: tuple[Address, frozenset[AddressField]]
    ) -> None:
        """Countries with metadata pass the country check whatever else is wrong."""
        address, _ = case
        error = validate(address, source=SOURCE)
        assert error is None or not error.has(AddressErrorType.INVALID_COUNTRY_CODE)


# =============================================================================
# Formatting Properties
# =============================================================================


class TestFormatterProperties:
    """Property tests for the formatters and output modes."""

    @given(display_address_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_plain_output_is_normalized(self, address: Address) -> None:
        """Plain output is trimmed and never holds a run of whitespace."""
        formatted = DefaultFormatter(source=SOURCE).format(address, "en")
        assert formatted == formatted.strip()
        assert not re.search(r"\s{2,}", formatted)
        assert PlainOutput().finalize(formatted) == formatted

    @given(display_address_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_format_is_deterministic(self, address: Address) -> None:
        """Formatting the same address twice gives the same text."""
        formatter = DefaultFormatter(source=SOURCE)
        assert formatter.format(address, "") == formatter.format(address, "")

    @given(display_address_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_name_and_street_lines_are_kept(self, address: Address) -> None:
        """The recipient and every street line appear verbatim."""
        formatted = DefaultFormatter(source=SOURCE).format(address, "en")
        assert address.name in formatted
        for line in address.street_address:
            assert line in formatted

    @given(display_address_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_html_has_no_empty_lines(self, address: Address) -> None:
        """HTML output never holds consecutive line breaks."""
        formatted = DefaultFormatter(output="html", source=SOURCE).format(address, "en")
        assert "<br><br>" not in formatted
        assert formatted == formatted.strip()

    @given(st.lists(st.sampled_from(["%N", "%O", "%A", "%D", "%C", "%S", "%Z", "%X", "%n", ", "])))
    @settings(max_examples=100)
    def test_compiled_fields_follow_the_format(self, parts: list[str]) -> None:
        """The compiled template names each field token in order."""
        template = compile_format("".join(parts))
        expected = [AddressField.from_key(p[1]) for p in parts if p.startswith("%") and p != "%n"]
        assert template.fields == expected


# =============================================================================
# Zone Properties
# =============================================================================


class TestZoneProperties:
    """Property tests for zones and post code matchers."""

    @given(
        st.lists(territory_strategy(), max_size=4),
        st.lists(territory_strategy(), max_size=4),
        display_address_strategy(),
    )
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_adding_territories_never_removes_addresses(
        self, territories: list[Territory], extra: list[Territory], address: Address
    ) -> None:
        """A zone only grows when territories are added."""
        if Zone(territories).contains(address):
            assert Zone(territories + extra).contains(address)

    @given(
        territory_strategy(),
        nested_ranges_strategy(),
        display_address_strategy(),
        st.data(),
    )
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_narrower_included_post_codes_never_add_addresses(
        self,
        base: Territory,
        ranges: tuple[PostCodeRange, PostCodeRange],
        address: Address,
        data: st.DataObject,
    ) -> None:
        """Narrowing a territory's included post codes only drops addresses."""
        outer, inner = ranges
        post_code = data.draw(st.integers(min_value=outer.start - 50, max_value=outer.end + 50))
        address = address.model_copy(update={"post_code": str(post_code)})
        base = replace(base, country=address.country, administrative_area="", locality="")
        unrestricted = replace(base, included_post_codes=None)
        wide = replace(base, included_post_codes=ExactMatcher(ranges=[outer]))
        narrow = replace(base, included_post_codes=ExactMatcher(ranges=[inner]))

        if narrow.contains(address):
            assert wide.contains(address)
        if wide.contains(address):
            assert unrestricted.contains(address)

    @given(st.lists(territory_strategy(), max_size=4), display_address_strategy())
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_zone_is_union_of_territories(
        self, territories: list[Territory], address: Address
    ) -> None:
        """A zone contains an address exactly when one of its territories does."""
        assert Zone(territories).contains(address) == any(
            t.contains(address) for t in territories
        )

    @given(country_code_strategy(), display_address_strategy())
    @settings(max_examples=50)
    def test_country_territory(self, country_code: str, address: Address) -> None:
        """A country-only territory matches exactly the addresses in that country."""
        assert Territory(country=country_code).contains(address) == (
            address.country == country_code
        )

    @given(post_code_range_strategy(), st.integers(min_value=-10, max_value=110000))
    @settings(max_examples=200)
    def test_range_membership(self, post_code_range: PostCodeRange, value: int) -> None:
        """A numeric post code matches a range exactly when it lies within it."""
        matcher = ExactMatcher(ranges=(post_code_range,))
        expected = post_code_range.start <= value <= post_code_range.end
        assert matcher.match(str(value)) is expected

    @given(st.text(alphabet="ABCDEFGHJKLMNPRSTUVWXYZ -", min_size=1, max_size=8))
    @settings(max_examples=50)
    def test_non_numeric_codes_never_match_ranges(self, post_code: str) -> None:
        """Post codes without digits only match literally."""
        assert not ExactMatcher(ranges=[(0, 999999)]).match(post_code)
