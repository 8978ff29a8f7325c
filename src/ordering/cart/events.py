"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Boolean, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A selection was added to the cart, as a new line or merged into one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Text(required=True, sanitize=False)
    item_id = String(required=True, sanitize=False)
    quantity = Float(required=True)
    unit_price = Float(required=True)
    merged = Boolean(default=False)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was set."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Text(required=True, sanitize=False)
    previous_quantity = Float(required=True)
    new_quantity = Float(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Text(required=True, sanitize=False)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed, on order placement or on request."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True, min_value=0)
