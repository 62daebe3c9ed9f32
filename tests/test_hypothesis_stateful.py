"""Stateful property-based tests using Hypothesis for workflow testing.

This module contains stateful tests using Hypothesis's RuleBasedStateMachine
to test multi-step workflows like AddressBuilder and AddressService.
"""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import HealthCheck, settings
from hypothesis.stateful import Bundle, RuleBasedStateMachine, invariant, rule

from ryandata_intl_address import AddressService
from ryandata_intl_address.models import Address, AddressBuilder, AddressField
from ryandata_intl_address.models.address import FIELD_ATTRIBUTES
from tests.strategies import (
    LOCALITIES,
    NAMES,
    ORGANIZATIONS,
    SAMPLE_COUNTRIES,
    STREET_LINES,
    display_address_strategy,
    field_value_strategy,
)

# =============================================================================
# AddressBuilder State Machine
# =============================================================================


class AddressBuilderStateMachine(RuleBasedStateMachine):
    """State machine for testing AddressBuilder fluent API.

    This tests that the builder keeps every value set through any mix of
    setters and that built addresses contain all set values.
    """

    def __init__(self) -> None:
        super().__init__()
        self.builder = AddressBuilder()
        self.expected_values: dict[str, object] = {}

    # =========================================================================
    # Rules for setting address fields
    # =========================================================================

    @rule(country=st.sampled_from(SAMPLE_COUNTRIES))
    def set_country(self, country: str) -> None:
        """Set the country with a lower-case code."""
        self.builder.with_country(country.lower())
        self.expected_values["country"] = country

    @rule(name=st.sampled_from(NAMES))
    def set_name(self, name: str) -> None:
        self.builder.with_name(name)
        self.expected_values["name"] = name

    @rule(organization=st.sampled_from(ORGANIZATIONS))
    def set_organization(self, organization: str) -> None:
        self.builder.with_organization(organization)
        self.expected_values["organization"] = organization

    @rule(lines=st.lists(st.sampled_from(STREET_LINES), max_size=3))
    def set_street_address(self, lines: list[str]) -> None:
        """Set the street lines, replacing any earlier lines."""
        self.builder.with_street_address(lines)
        self.expected_values["street_address"] = tuple(lines)

    @rule(locality=st.sampled_from(LOCALITIES))
    def set_locality(self, locality: str) -> None:
        self.builder.with_locality(locality)
        self.expected_values["locality"] = locality

    @rule(post_code=st.text(alphabet="0123456789", min_size=4, max_size=6))
    def set_post_code(self, post_code: str) -> None:
        self.builder.with_post_code(post_code)
        self.expected_values["post_code"] = post_code

    @rule(
        field=st.sampled_from(
            [
                AddressField.DEPENDENT_LOCALITY,
                AddressField.ADMINISTRATIVE_AREA,
                AddressField.SORTING_CODE,
            ]
        ),
        value=field_value_strategy(),
    )
    def set_by_field(self, field: AddressField, value: str) -> None:
        """Set a field through with_field by its value name."""
        self.builder.with_field(field.value, value)
        self.expected_values[FIELD_ATTRIBUTES[field]] = value

    # =========================================================================
    # Build and verify rule
    # =========================================================================

    @rule()
    def build_and_verify(self) -> None:
        """Build the address and verify all expected values are present."""
        address = self.builder.build()
        assert isinstance(address, Address)
        assert address.is_zero() is not any(self.expected_values.values())

        for attribute, expected in self.expected_values.items():
            actual = getattr(address, attribute)
            assert actual == expected, f"Field {attribute}: expected {expected}, got {actual}"

    @rule()
    def build_is_repeatable(self) -> None:
        """Building twice yields equal addresses."""
        assert self.builder.build() == self.builder.build()

    # =========================================================================
    # Reset rule
    # =========================================================================

    @rule()
    def reset_builder(self) -> None:
        """Reset the builder to initial state."""
        self.builder.reset()
        self.expected_values.clear()

    # =========================================================================
    # Invariants
    # =========================================================================

    @invariant()
    def builder_is_valid(self) -> None:
        """Builder should always be in a valid state."""
        assert self.builder is not None
        assert isinstance(self.builder._data, dict)
        assert set(self.builder._data) == set(self.expected_values)


# Create pytest test case
TestAddressBuilder = AddressBuilderStateMachine.TestCase
TestAddressBuilder.settings = settings(
    max_examples=100,
    stateful_step_count=20,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


# =============================================================================
# AddressService State Machine
# =============================================================================


class AddressServiceStateMachine(RuleBasedStateMachine):
    """State machine for testing AddressService validate/format cycles.

    This tests that the service gives consistent answers for the same
    address however the calls are interleaved.
    """

    def __init__(self) -> None:
        super().__init__()
        self.service = AddressService(output="plain")
        self.formatted: dict[Address, str] = {}

    addresses = Bundle("addresses")

    @rule(target=addresses, address=display_address_strategy())
    def add_address(self, address: Address) -> Address:
        return address

    @rule(address=addresses)
    def validate_is_consistent(self, address: Address) -> None:
        """validate and is_valid agree, and errors name the address's country."""
        error = self.service.validate(address)
        assert self.service.is_valid(address) is (error is None)
        if error is not None:
            assert len(error) == len(error.kinds) > 0
            assert all(e.country == address.country for e in error)

    @rule(address=addresses)
    def format_is_stable(self, address: Address) -> None:
        """Formatting an address always gives the first result again."""
        formatted = self.service.format(address)
        assert self.formatted.setdefault(address, formatted) == formatted

    @rule(address=addresses)
    def postal_label_from_same_country(self, address: Address) -> None:
        """A domestic label matches a label with no origin country."""
        domestic = self.service.format_postal_label(address, origin_country=address.country)
        assert domestic == self.service.format_postal_label(address)

    @rule(address=addresses)
    def country_metadata_exists(self, address: Address) -> None:
        assert self.service.has_country(address.country)
        assert self.service.get_country(address.country).id == address.country

    # =========================================================================
    # Invariants
    # =========================================================================

    @invariant()
    def service_is_valid(self) -> None:
        """Service should always be in a valid state."""
        assert self.service is not None
        assert self.service.data_source is not None
        assert self.service.validator is not None


# Create pytest test case
TestAddressService = AddressServiceStateMachine.TestCase
TestAddressService.settings = settings(
    max_examples=50,
    stateful_step_count=15,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
