"""BDD tests for order pricing."""

from ordering.errors import NotFoundError
from ordering.reference.management import RepriceCatalogItem
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_pricing.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.parse('the customer orders "{spec}"'), target_fixture="order")
def _(engine, customer_id, lines_for, spec):
    return engine.create_order(customer_id, lines_for(spec))


@when(parsers.parse('the customer tries to order "{spec}"'))
def _(engine, customer_id, lines_for, context, spec):
    try:
        engine.create_order(customer_id, lines_for(spec))
    except NotFoundError as exc:
        context["exc"] = exc


@when("the customer tries to order nothing")
def _(engine, customer_id, context):
    try:
        engine.create_order(customer_id, [])
    except ValidationError as exc:
        context["exc"] = exc


@when(parsers.parse('the catalog item "{sku}" is repriced to "{price}"'))
def _(skus, sku, price):
    current_domain.process(RepriceCatalogItem(catalog_item_id=skus[sku], price=price), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('the order line totals are "{totals}"'))
def _(order, totals):
    assert [str(item.total_price) for item in order.items] == [total.strip() for total in totals.split(",")]


@then(parsers.parse('the order items are "{names}"'))
def _(order, names):
    assert [item.item_name for item in order.items] == [name.strip() for name in names.split(",")]


@then(parsers.parse('the order subtotal is "{amount}"'))
def _(order, amount):
    assert str(order.subtotal) == amount


@then(parsers.parse('the order VAT is "{amount}"'))
def _(order, amount):
    assert str(order.vat) == amount


@then("the order is rejected as not found")
def _(context):
    assert isinstance(context["exc"], NotFoundError)


@then("the order is rejected as invalid")
def _(context):
    assert isinstance(context["exc"], ValidationError)
