"""Domain events for the FoodCart aggregate."""

from protean.fields import Boolean, Identifier, Integer

from foodorder.domain import foodorder


@foodorder.event(part_of="FoodCart")
class CartLineAdded:
    """A menu item was added to the cart, as a new line or merged into one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    catalog_item_id = Identifier(required=True)
    quantity = Integer(required=True)
    merged = Boolean(default=False)


@foodorder.event(part_of="FoodCart")
class CartLineQuantityUpdated:
    """The quantity of a cart line was set to a new positive value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@foodorder.event(part_of="FoodCart")
class CartLineRemoved:
    """A line left the cart, either explicitly or by being set to zero."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)


@foodorder.event(part_of="FoodCart")
class CartCleared:
    """Every line was removed from the cart at once."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)
