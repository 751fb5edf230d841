"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import SalesOrder
from ordering.reference.management import AddCatalogItem, RegisterCustomer
from protean import current_domain
from pytest_bdd import given, parsers, then


def parse_lines(spec: str, skus: dict) -> list[tuple[str, int]]:
    """Turn ``"2 x MUG-001, 1 x TEE-001"`` into ``(catalog_item_id, quantity)`` pairs."""
    lines = []
    for part in filter(None, (chunk.strip() for chunk in spec.split(","))):
        quantity, sku = (token.strip() for token in part.split(" x ", 1))
        lines.append((skus.get(sku, f"missing-{sku}"), int(quantity)))
    return lines


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def skus():
    """Catalog item ids keyed by SKU, filled by Given steps."""
    return {}


@pytest.fixture()
def lines_for(skus):
    """Resolve a line spec against the SKUs registered so far."""
    return lambda spec: parse_lines(spec, skus)


@pytest.fixture()
def context():
    """Container for values captured between steps."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('a customer named "{name}"'), target_fixture="customer_id")
def _(name):
    return current_domain.process(RegisterCustomer(name=name), asynchronous=False)


@given(parsers.parse('the catalog item "{sku}" named "{name}" costs "{price}"'))
def _(skus, sku, name, price):
    skus[sku] = current_domain.process(AddCatalogItem(sku=sku, name=name, price=price), asynchronous=False)


@given(parsers.parse('the customer has placed an order for "{spec}"'), target_fixture="order")
def _(engine, customer_id, lines_for, spec):
    return engine.create_order(customer_id, lines_for(spec))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the order total is "{amount}"'))
def _(engine, order, amount):
    assert str(engine.get_order(order.id).total) == amount


@then(parsers.parse('the order status is "{status}"'))
def _(engine, order, status):
    assert engine.get_order(order.id).status == status


@then("no order is stored")
def _():
    assert current_domain.repository_for(SalesOrder)._dao.query.all().items == []
