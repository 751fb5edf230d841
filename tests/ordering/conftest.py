"""Shared fixtures for the Ordering tests: reference data and the engine."""

import pytest
from ordering.order.engine import OrderEngine
from ordering.reference.catalog import CatalogItem
from ordering.reference.customer import Customer
from ordering.reference.gateway import set_gateway
from ordering.reference.gateway.fake_adapter import FakeReferenceData
from ordering.reference.management import AddCatalogItem, RegisterCustomer
from protean import current_domain


@pytest.fixture()
def customer():
    customer_id = current_domain.process(RegisterCustomer(name="Ada Lovelace"), asynchronous=False)
    return current_domain.repository_for(Customer).get(customer_id)


@pytest.fixture()
def catalog():
    """Three catalog items keyed by SKU."""
    items = {}
    for sku, name, price in [
        ("MUG-001", "Coffee Mug", "19.99"),
        ("TEE-001", "T-Shirt", "29.50"),
        ("PEN-001", "Ballpoint Pen", "0.99"),
    ]:
        item_id = current_domain.process(AddCatalogItem(sku=sku, name=name, price=price), asynchronous=False)
        items[sku] = current_domain.repository_for(CatalogItem).get(item_id)
    return items


@pytest.fixture()
def engine():
    return OrderEngine()


@pytest.fixture()
def fake_gateway():
    """Install a fake gateway with one customer and two catalog items."""
    fake = FakeReferenceData()
    fake.add_customer(Customer.register(name="Grace Hopper", customer_id="cust-fake-001"))
    fake.add_catalog_item(CatalogItem.add(sku="MUG-001", name="Coffee Mug", price="19.99", catalog_item_id="item-mug"))
    fake.add_catalog_item(CatalogItem.add(sku="TEE-001", name="T-Shirt", price="29.50", catalog_item_id="item-tee"))
    set_gateway(fake)
    return fake
