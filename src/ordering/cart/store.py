"""Cart store, the single owner of a browsing session's cart.

The store is created once per session and handed to whatever needs the cart
(menu, cart drawer, checkout). It holds the session's ``ShoppingCart``; each
operation runs on the aggregate, which swaps its contents in whole and raises
an event. Subscribers are told about every change along with that event.
"""

from datetime import UTC, datetime

from ordering.cart import cart as operations
from ordering.cart.cart import ShoppingCart
from ordering.cart.pricing import cart_total, total_item_count
from ordering.domain import logger


class CartStore:
    def __init__(self, cart=None, clock=None):
        self.cart = cart if cart is not None else ShoppingCart.create()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._subscribers = []
        self.events = []
        self.is_open = False

    @classmethod
    def from_state(cls, state, clock=None):
        """Start a store from contents rebuilt elsewhere, e.g. a client-held cart."""
        return cls(ShoppingCart(lines=list(state.lines)), clock=clock)

    @property
    def state(self):
        return self.cart.state

    @property
    def lines(self):
        return self.cart.lines

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------
    def subscribe(self, callback):
        """Register ``callback(state, event)``; returns a function that unsubscribes."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _changed(self):
        event = self.cart._events[-1]
        state = self.state
        self.events.append(event)
        logger.info(
            "cart_changed",
            event=type(event).__name__,
            line_count=len(state.lines),
            item_count=total_item_count(state),
        )
        for callback in list(self._subscribers):
            callback(state, event)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_to_cart(self, item, quantity=1, variation=None, add_ons=None):
        line = self.cart.add_item(item, quantity, variation, add_ons, now=self._clock())
        self._changed()
        return line

    def update_quantity(self, line_id, quantity):
        if self.cart.update_line_quantity(line_id, quantity) is None:
            logger.debug("cart_line_not_found", line_id=str(line_id))
            return
        self._changed()

    def remove_from_cart(self, line_id):
        if self.cart.remove_line(line_id) is None:
            logger.debug("cart_line_not_found", line_id=str(line_id))
            return
        self._changed()

    def clear_cart(self):
        self.cart.clear()
        self._changed()

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def total_price(self) -> float:
        return cart_total(self.state)

    def total_items(self):
        return total_item_count(self.state)

    def quantity_of_item(self, item_id):
        return operations.quantity_of_item(self.state, item_id)

    # -------------------------------------------------------------------
    # Cart drawer
    # -------------------------------------------------------------------
    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False
