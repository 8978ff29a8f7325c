"""Commands and handler for managing cart items.

``AddToCart`` carries the catalog item as the storefront showed it, along with
the chosen variation and add-on ids; the handler resolves those ids against
the item and applies the change to the cart.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, List, String, Text, ValueObject
from protean.utils.globals import current_domain

from catalogue.item.item import CatalogItem
from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    item = ValueObject(CatalogItem, required=True)
    quantity = Float(default=1.0)
    variation_id = String(sanitize=False)
    add_on_ids = List(content_type=String(sanitize=False))  # repeated ids mean repeated selections


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    line_id = Text(required=True, sanitize=False)
    quantity = Float(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    line_id = Text(required=True, sanitize=False)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


def _selection(item, variation_id, add_on_ids):
    variation = None
    if variation_id is not None:
        variation = item.variation(variation_id)
        if variation is None:
            raise ValidationError({"variation_id": ["Variation not found for this item"]})

    add_ons = []
    for add_on_id in add_on_ids:
        add_on = item.add_on(add_on_id)
        if add_on is None:
            raise ValidationError({"add_on_ids": [f"Add-on {add_on_id} not found for this item"]})
        add_ons.append(add_on)

    return variation, add_ons


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        variation, add_ons = _selection(command.item, command.variation_id, command.add_on_ids)
        line = cart.add_item(command.item, command.quantity, variation, add_ons)

        repo.add(cart)
        return line.id

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.update_line_quantity(command.line_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_line(command.line_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)
