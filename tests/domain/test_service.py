"""Unit tests for the Service aggregate and its options."""

from decimal import Decimal

import pytest

from printshop.domain.exceptions import ValidationError
from printshop.domain.model.service import OptionKind, Service, ServiceCategory, ServiceOption
from printshop.domain.model.value_objects import Money
from tests.fakes import flyer_service


def _create(**overrides) -> Service:
    fields = dict(
        id="1",
        name="Posters A2",
        category=ServiceCategory.POSTERS,
        base_price=Money.of("300"),
    )
    fields.update(overrides)
    return Service.create(**fields)


class TestServiceCreation:

    def test_defaults(self):
        service = _create()
        assert service.is_active is True
        assert service.min_quantity == 1
        assert service.max_quantity == 10000
        assert service.options == []

    def test_name_is_trimmed(self):
        assert _create(name="  Posters  ").name == "Posters"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            _create(name="  ")

    def test_min_quantity_below_one_rejected(self):
        with pytest.raises(ValidationError, match="at least 1"):
            _create(min_quantity=0)

    def test_max_below_min_rejected(self):
        with pytest.raises(ValidationError, match="must be >= minimum"):
            _create(min_quantity=10, max_quantity=5)

    def test_duplicate_option_ids_rejected(self):
        option = ServiceOption(id="x", name="X", kind=OptionKind.CHECKBOX)
        with pytest.raises(ValidationError, match="Duplicate option ids: x"):
            _create(options=[option, option])


class TestServiceOption:

    def test_select_needs_choices(self):
        with pytest.raises(ValidationError, match="at least one choice"):
            ServiceOption(id="paper", name="Paper", kind=OptionKind.SELECT)

    def test_negative_modifier_allowed(self):
        option = ServiceOption(
            id="eco", name="Eco paper", kind=OptionKind.CHECKBOX, price_modifier=Decimal("-2")
        )
        assert option.price_modifier == Decimal("-2")


class TestServiceQueries:

    def test_quantity_range_is_inclusive(self):
        service = flyer_service()
        assert service.is_quantity_in_range(1)
        assert service.is_quantity_in_range(1000)
        assert not service.is_quantity_in_range(0)
        assert not service.is_quantity_in_range(1001)

    def test_get_option(self):
        service = flyer_service()
        assert service.get_option("glossy").kind is OptionKind.CHECKBOX
        assert service.get_option("nope") is None

    def test_deactivate_and_activate(self):
        service = flyer_service()
        service.deactivate()
        assert service.is_active is False
        service.activate()
        assert service.is_active is True
