"""BDD tests for the purchase order mailbox."""

from pytest_bdd import parsers, scenarios, then, when

scenarios("features/purchase_orders.feature")


@when(parsers.cfparse('"{pharmacist}" orders "{item_name}" from "{manufacturer}"'))
def place_order(service, pharmacist, item_name, manufacturer):
    service.create_purchase_order(pharmacist, item_name=item_name, description=None, manufacturer=manufacturer)


@then(parsers.cfparse('the mailbox of "{manufacturer}" holds an order for "{item_name}"'))
def mailbox_holds(service, manufacturer, item_name):
    order = service.view_purchase_orders(manufacturer)
    assert order is not None
    assert order.item_name == item_name


@then(parsers.cfparse('the mailbox of "{manufacturer}" is empty'))
def mailbox_empty(service, manufacturer):
    assert service.view_purchase_orders(manufacturer) is None
