"""Tests for the Address model and its builders."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ryandata_intl_address import (
    Address,
    AddressBuilder,
    AddressErrorType,
    AddressField,
    RyanDataAddressError,
    RyanDataValidationError,
    new_address,
    new_valid_address,
    with_administrative_area,
    with_country,
    with_locality,
    with_name,
    with_organization,
    with_post_code,
    with_sorting_code,
    with_street_address,
)

F = AddressField


class TestAddress:
    def test_empty_address_is_zero(self) -> None:
        assert Address().is_zero()

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": "John Smith"},
            {"organization": "Company Pty Ltd"},
            {"street_address": ["525 Collins Street"]},
            {"dependent_locality": "test"},
            {"locality": "Melbourne"},
            {"administrative_area": "VIC"},
            {"post_code": "3000"},
            {"country": "AU"},
            {"sorting_code": "1234"},
        ],
    )
    def test_any_field_makes_address_non_zero(self, fields: dict[str, object]) -> None:
        assert not Address.model_validate(fields).is_zero()

    def test_aliases(self) -> None:
        address = Address.model_validate(
            {"city": "Melbourne", "state": "VIC", "postal_code": "3000", "street": "1 Main St"}
        )
        assert address.locality == "Melbourne"
        assert address.administrative_area == "VIC"
        assert address.post_code == "3000"
        assert address.street_address == ("1 Main St",)

    def test_country_is_upper_cased(self) -> None:
        assert Address(country="au").country == "AU"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            Address().locality = "Melbourne"  # type: ignore[misc]

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Address.model_validate({"suburbs": "Toorak"})

    def test_populated_fields(self) -> None:
        address = Address(country="AU", post_code="3000", name="John", street_address=("",))
        assert address.populated_fields() == [F.COUNTRY, F.NAME, F.STREET_ADDRESS, F.POST_CODE]

    def test_blank(self) -> None:
        address = Address(street_address=("", "  "), locality=" ")
        assert address.is_blank(F.STREET_ADDRESS)
        assert address.is_blank(F.LOCALITY)
        assert address.has_value(F.LOCALITY)
        assert not address.has_value(F.POST_CODE)

    def test_to_dict(self) -> None:
        data = Address(country="AU", street_address=("Line 1", "Line 2")).to_dict()
        assert data["street_address"] == ["Line 1", "Line 2"]
        assert data["country"] == "AU"
        assert data["post_code"] == ""


class TestAddressBuilder:
    def test_fluent_build(self) -> None:
        address = (
            AddressBuilder()
            .with_country("au")
            .with_name("John Smith")
            .with_organization("Company Pty Ltd")
            .with_street_address(["525 Collins Street"])
            .with_locality("Melbourne")
            .with_administrative_area("VIC")
            .with_post_code("3000")
            .with_sorting_code("")
            .build()
        )
        assert address.country == "AU"
        assert address.street_address == ("525 Collins Street",)
        assert address.organization == "Company Pty Ltd"

    def test_with_field(self) -> None:
        address = (
            AddressBuilder()
            .with_field(F.COUNTRY, "fr")
            .with_field("StreetAddress", "27 Rue Pasteur")
            .with_field(F.SORTING_CODE, "CEDEX 7")
            .build()
        )
        assert address.country == "FR"
        assert address.street_address == ("27 Rue Pasteur",)
        assert address.sorting_code == "CEDEX 7"

    def test_with_unknown_field(self) -> None:
        with pytest.raises(RyanDataAddressError) as exc_info:
            AddressBuilder().with_field("Suburb", "Toorak")
        assert exc_info.value.type == AddressErrorType.ADDRESS_BUILDER.value
        assert exc_info.value.context["field"] == "Suburb"

    def test_reset(self) -> None:
        builder = AddressBuilder().with_locality("Melbourne")
        assert builder.reset().build().is_zero()

    def test_apply_options(self) -> None:
        address = AddressBuilder().apply(with_country("AU"), with_locality("Melbourne")).build()
        assert address == Address(country="AU", locality="Melbourne")

    def test_build_validated(self) -> None:
        address = (
            AddressBuilder()
            .with_country("AU")
            .with_street_address(["525 Collins Street"])
            .with_locality("Melbourne")
            .with_administrative_area("VIC")
            .with_post_code("3000")
            .build_validated()
        )
        assert address.post_code == "3000"


class TestOptionFunctions:
    def test_new_address_does_not_validate(self) -> None:
        address = new_address(with_country("AU"), with_post_code("not a post code"))
        assert address.post_code == "not a post code"

    def test_options_are_reusable(self) -> None:
        option = with_street_address(["525 Collins Street"])
        first = new_address(option, with_country("AU"))
        second = new_address(option, with_country("NZ"))
        assert first.street_address == second.street_address

    def test_later_options_win(self) -> None:
        address = new_address(with_name("First"), with_name("Second"))
        assert address.name == "Second"

    def test_new_valid_address(self) -> None:
        address, error = new_valid_address(
            with_name("John Smith"),
            with_organization("Company Pty Ltd"),
            with_street_address(["525 Collins Street"]),
            with_locality("Melbourne"),
            with_administrative_area("VIC"),
            with_post_code("3000"),
            with_sorting_code(""),
            with_country("AU"),
        )
        assert error is None
        assert address.locality == "Melbourne"

    def test_new_valid_address_returns_invalid_address(self) -> None:
        address, error = new_valid_address(with_country("AU"), with_post_code("VIC 3000"))
        assert error is not None
        assert [kind.value for kind in error.kinds] == [
            "missing_required_fields",
            "invalid_post_code",
        ]
        assert address.post_code == "VIC 3000"
        assert error.address is address

    def test_new_valid_address_reraises_error_without_address(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import ryandata_intl_address.validation as validation

        detached = RyanDataValidationError([RyanDataAddressError.invalid_country_code("AU")])
        monkeypatch.setattr(validation, "validate", lambda address, source=None: detached)

        with pytest.raises(RyanDataValidationError) as exc_info:
            new_valid_address(with_country("AU"))
        assert exc_info.value is detached
