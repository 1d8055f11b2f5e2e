from datetime import date, timedelta

import pytest

from estoque.catalog.filters import Product, ProductCatalog, categories, filter_products, low_stock
from estoque.notifications import NotificationKind


@pytest.fixture()
def products():
    return [
        Product(id="1", name="Hinário 5", category="Publicações CCB", quantity=45, location="Estante A-1", min_stock=20),
        Product(id="2", name="Revista O Mensageiro", category="Publicações CCB", quantity=120, location="Estante A-2", min_stock=50),
        Product(id="3", name="Canetas Azuis", category="Material de Escritório", quantity=15, location="Gaveta B-1", min_stock=25),
        Product(id="4", name="Folhetos Evangelísticos", category="Publicações CCB", quantity=200, location="Estante C-1", min_stock=100),
    ]


def ids(items):
    return [p.id for p in items]


def test_filter_all_with_empty_term_returns_everything(products):
    assert ids(filter_products(products, "", "all")) == ["1", "2", "3", "4"]


def test_filter_matches_name_or_location_case_insensitively(products):
    assert ids(filter_products(products, "HINÁRIO")) == ["1"]
    assert ids(filter_products(products, "estante")) == ["1", "2", "4"]
    assert ids(filter_products(products, "gaveta b")) == ["3"]


def test_filter_by_category(products):
    assert ids(filter_products(products, "", "Material de Escritório")) == ["3"]
    assert filter_products(products, "", "Cozinha") == []


@pytest.mark.parametrize(
    "term,category",
    [
        ("estante", "Publicações CCB"),
        ("a", "Material de Escritório"),
        ("1", "Publicações CCB"),
        ("zzz", "all"),
    ],
)
def test_filter_is_the_intersection_of_term_and_category(products, term, category):
    by_term = set(ids(filter_products(products, term, "all")))
    by_category = set(ids(filter_products(products, "", category)))

    assert set(ids(filter_products(products, term, category))) == by_term & by_category


def test_categories_first_seen_order(products):
    assert categories(products) == ["Publicações CCB", "Material de Escritório"]


def test_low_stock_includes_equal_to_minimum(products):
    products[0].quantity = 20

    assert ids(low_stock(products)) == ["1", "3"]


def test_catalog_add_requires_name_and_category():
    catalog = ProductCatalog()

    assert catalog.add("", "Cozinha") is None
    assert catalog.add("Arroz", " ") is None
    assert catalog.products == []
    assert catalog.notifier.last.kind == NotificationKind.ERROR

    product = catalog.add("Arroz", "Cozinha", quantity=5, location="Despensa")
    assert catalog.products == [product]
    assert catalog.notifier.last.kind == NotificationKind.SUCCESS


def test_catalog_update_sets_last_updated_to_today(products):
    products[0].last_updated = date.today() - timedelta(days=30)
    catalog = ProductCatalog(products)

    updated = catalog.update("1", location="Estante B-3")

    assert updated.location == "Estante B-3"
    assert updated.last_updated == date.today()
    assert catalog.get("1").location == "Estante B-3"


def test_catalog_update_rejects_blank_name(products):
    catalog = ProductCatalog(products)

    assert catalog.update("1", name="") is None
    assert catalog.get("1").name == "Hinário 5"


def test_catalog_adjust_quantity_clamps_at_zero(products):
    catalog = ProductCatalog(products)

    assert catalog.adjust_quantity("3", -40).quantity == 0
    assert catalog.adjust_quantity("3", 7).quantity == 7


def test_catalog_remove_keeps_others_in_order(products):
    catalog = ProductCatalog(products)

    catalog.remove("2")

    assert ids(catalog.products) == ["1", "3", "4"]
    assert catalog.notifier.last.title == "Produto removido"


def test_catalog_filter_and_low_stock(products):
    catalog = ProductCatalog(products)

    assert ids(catalog.filter("canetas", "all")) == ["3"]
    assert ids(catalog.low_stock()) == ["3"]
    assert catalog.categories() == ["Publicações CCB", "Material de Escritório"]


@pytest.mark.parametrize(
    "changes",
    [{"quantity": "dez"}, {"min_stock": -1}, {"quantity": None, "min_stock": "muito"}],
)
def test_catalog_update_reports_bad_values(products, changes):
    catalog = ProductCatalog(products)

    assert catalog.update("1", **changes) is None
    assert catalog.notifier.last.kind == NotificationKind.ERROR
    assert catalog.get("1").quantity == 45
    assert catalog.get("1").min_stock == 20


def test_catalog_add_reports_bad_values():
    catalog = ProductCatalog()

    assert catalog.add("Arroz", "Cozinha", quantity="muito") is None
    assert catalog.add("Feijão", "Cozinha", min_stock=-3) is None
    assert catalog.products == []
    assert len(catalog.notifier) == 2


def test_catalog_adjust_quantity_reports_bad_delta(products):
    catalog = ProductCatalog(products)

    assert catalog.adjust_quantity("1", "x") is None
    assert catalog.notifier.last.kind == NotificationKind.ERROR
    assert catalog.get("1").quantity == 45
