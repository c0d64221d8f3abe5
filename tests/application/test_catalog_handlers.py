"""Integration tests for the catalog use cases."""

import pytest

from printshop.application.add_service import AddServiceHandler
from printshop.application.dto import OptionSpec
from printshop.application.list_services import ListServicesHandler
from printshop.application.quote_service import QuoteServiceHandler
from printshop.application.set_service_active import SetServiceActiveHandler
from printshop.application.update_service import UpdateServiceHandler
from printshop.domain.exceptions import (
    ForbiddenError,
    InvalidQuantity,
    ServiceNotFound,
    ValidationError,
)


class TestAddService:

    def test_admin_adds_with_next_id(self, service_repo, admin):
        dto = AddServiceHandler(service_repo).handle(
            admin,
            name="Posters A2",
            category="posters",
            base_price="1500",
            unit="poster",
            min_quantity=1,
            max_quantity=200,
            options=[
                OptionSpec("lamination", "Lamination", "checkbox", price_modifier="250"),
            ],
        )
        assert dto.id == "3"
        assert dto.base_price == "1500.00 XOF"
        assert dto.options[0].kind == "checkbox"
        assert service_repo.get_by_id("3").max_quantity == 200

    def test_currency_comes_from_handler(self, service_repo, admin):
        dto = AddServiceHandler(service_repo, currency="EUR").handle(
            admin, name="Stickers", category="other", base_price="2"
        )
        assert dto.base_price == "2.00 EUR"

    def test_duplicate_name_rejected(self, service_repo, admin):
        with pytest.raises(ValidationError, match="already exists"):
            AddServiceHandler(service_repo).handle(
                admin, name="flyers a5", category="flyers", base_price="90"
            )

    def test_unknown_category(self, service_repo, admin):
        with pytest.raises(ValidationError, match="category"):
            AddServiceHandler(service_repo).handle(
                admin, name="Mugs", category="mugs", base_price="90"
            )

    def test_select_without_choices_rejected(self, service_repo, admin):
        with pytest.raises(ValidationError):
            AddServiceHandler(service_repo).handle(
                admin,
                name="Banners",
                category="other",
                base_price="90",
                options=[OptionSpec("size", "Size", "select")],
            )

    def test_client_forbidden(self, service_repo, alice):
        with pytest.raises(ForbiddenError, match="manage the catalog"):
            AddServiceHandler(service_repo).handle(
                alice, name="Posters", category="posters", base_price="10"
            )


class TestUpdateService:

    def test_only_given_fields_change(self, service_repo, admin):
        dto = UpdateServiceHandler(service_repo).handle(admin, "1", base_price="120")
        assert dto.base_price == "120.00 XOF"
        assert dto.name == "Flyers A5"
        assert dto.max_quantity == 1000

    def test_quantity_bounds(self, service_repo, admin):
        dto = UpdateServiceHandler(service_repo).handle(admin, "1", min_quantity=10)
        assert (dto.min_quantity, dto.max_quantity) == (10, 1000)
        with pytest.raises(ValidationError):
            UpdateServiceHandler(service_repo).handle(admin, "1", max_quantity=5)

    def test_rename_onto_other_service(self, service_repo, admin):
        with pytest.raises(ValidationError, match="already exists"):
            UpdateServiceHandler(service_repo).handle(admin, "1", name="Business cards")

    def test_unknown_service(self, service_repo, admin):
        with pytest.raises(ServiceNotFound):
            UpdateServiceHandler(service_repo).handle(admin, "99", base_price="1")

    def test_client_forbidden(self, service_repo, alice):
        with pytest.raises(ForbiddenError):
            UpdateServiceHandler(service_repo).handle(alice, "1", base_price="1")


class TestServiceActivation:

    def test_deactivate_then_activate(self, service_repo, admin):
        handler = SetServiceActiveHandler(service_repo)
        assert handler.handle(admin, "1", False).is_active is False
        assert service_repo.get_by_id("1").is_active is False
        assert handler.handle(admin, "1", True).is_active is True

    def test_client_forbidden(self, service_repo, alice):
        with pytest.raises(ForbiddenError):
            SetServiceActiveHandler(service_repo).handle(alice, "1", False)


class TestListServices:

    def test_filters(self, service_repo, admin):
        SetServiceActiveHandler(service_repo).handle(admin, "2", False)
        handler = ListServicesHandler(service_repo)

        assert [s.id for s in handler.handle().items] == ["1", "2"]
        assert [s.id for s in handler.handle(active_only=True).items] == ["1"]
        assert [s.id for s in handler.handle(category="cards").items] == ["2"]

    def test_search_name_and_description(self, service_repo, admin):
        UpdateServiceHandler(service_repo).handle(admin, "2", description="Matte or GLOSSY stock")
        handler = ListServicesHandler(service_repo)

        assert [s.id for s in handler.handle(search="flyer").items] == ["1"]
        assert [s.id for s in handler.handle(search="glossy").items] == ["2"]
        assert handler.handle(search="banner").total == 0

    def test_pages(self, service_repo):
        result = ListServicesHandler(service_repo).handle(page=2, limit=1)
        assert [s.id for s in result.items] == ["2"]
        assert (result.total, result.pages) == (2, 2)

    def test_categories_in_use(self, service_repo):
        assert ListServicesHandler(service_repo).categories() == ["flyers", "cards"]


class TestQuoteService:

    def test_quote_with_options(self, service_repo):
        dto = QuoteServiceHandler(service_repo).handle(
            "1", 10, {"glossy": True, "paper": "premium"}
        )
        assert dto.unit_price == "100.00 XOF"
        assert dto.total_price == "1150.00 XOF"
        assert dto.quantity == 10

    def test_quote_respects_bounds(self, service_repo):
        with pytest.raises(InvalidQuantity, match="Minimum quantity"):
            QuoteServiceHandler(service_repo).handle("2", 10)

    def test_quote_unknown_service(self, service_repo):
        with pytest.raises(ServiceNotFound):
            QuoteServiceHandler(service_repo).handle("42", 1)
