"""Shopping cart state and the operations that transform it.

Cart contents are an immutable value: every operation takes a ``CartState``
and returns a new one, leaving the input untouched. Lines keep insertion order
and no two lines may share a line id.

Each line's ``unit_price`` is captured when the line is first created and is
never recomputed, even if the catalog price changes while the line sits in the
cart. Merging more of the same selection into a line only raises its quantity.

``ShoppingCart`` is the aggregate that owns a session's contents. It applies
the operations below and raises an event for every change.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, List, String, Text, ValueObject

from catalogue.item.item import Variation
from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.cart.identity import LineKey, SelectedAddOn, group_add_ons, line_key
from ordering.cart.pricing import unit_price
from ordering.domain import ordering


@ordering.value_object
class CartLine:
    """One priced combination of item, variation and add-ons at a quantity."""

    key: ValueObject(LineKey, required=True)
    item_id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    description: Text(sanitize=False, default="")
    image: Text(sanitize=False)
    measurement_unit: String(max_length=20, sanitize=False)  # set only for items sold by weight
    quantity: int | float
    selected_variation: ValueObject(Variation)
    selected_add_ons: List(content_type=ValueObject(SelectedAddOn))
    unit_price: Float(required=True, min_value=0.0)

    @invariant.post
    def quantity_must_be_positive(self):
        if self.quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})

    @property
    def id(self) -> str:
        return self.key.line_id

    @property
    def is_measured(self) -> bool:
        return self.measurement_unit is not None


@ordering.value_object
class CartState:
    lines: List(content_type=ValueObject(CartLine))

    @invariant.post
    def line_ids_must_be_unique(self):
        line_ids = self.line_ids
        if len(line_ids) != len(set(line_ids)):
            raise ValidationError({"lines": ["A cart cannot hold two lines with the same identity"]})

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def line_ids(self) -> list[str]:
        return [line.id for line in self.lines]


def _normalize_quantity(quantity, measured):
    """Whole-unit items take integer quantities; measured items take weights."""
    if quantity is None or isinstance(quantity, bool):
        raise ValidationError({"quantity": ["Quantity must be a number"]})
    if measured:
        return quantity
    if not float(quantity).is_integer():
        raise ValidationError({"quantity": ["Quantity must be a whole number for this item"]})
    return int(quantity)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def find_line(state, line_id):
    return next((line for line in state.lines if line.id == str(line_id)), None)


def quantity_of_item(state, item_id):
    """Total quantity of a catalog item across all of its lines."""
    return sum(line.quantity for line in state.lines if line.item_id == item_id)


# ---------------------------------------------------------------------------
# Transformations
# ---------------------------------------------------------------------------
def add_to_cart(state, item, quantity=1, variation=None, add_ons=None, now=None) -> CartState:
    """Add a selection to the cart, merging into an identical line if present."""
    quantity = _normalize_quantity(quantity, item.show_measurement)
    if quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
    if not item.available:
        raise ValidationError({"item": [f"{item.name} is currently unavailable"]})
    if variation is not None and item.variation(variation.id) is None:
        raise ValidationError({"variation": [f"{variation.name} is not an option for {item.name}"]})

    grouped = group_add_ons(add_ons)
    unknown = [add_on.name for add_on in grouped if item.add_on(add_on.id) is None]
    if unknown:
        raise ValidationError({"add_ons": [f"{name} is not an add-on for {item.name}" for name in unknown]})

    key = line_key(item, variation, grouped)
    existing = find_line(state, key.line_id)

    if existing is not None:
        merged = existing.replace(quantity=existing.quantity + quantity)
        return CartState(lines=[merged if line.id == existing.id else line for line in state.lines])

    line = CartLine(
        key=key,
        item_id=item.id,
        name=item.name,
        description=item.description,
        image=item.image,
        measurement_unit=(item.measurement_unit or "kg") if item.show_measurement else None,
        quantity=quantity,
        selected_variation=variation,
        selected_add_ons=list(grouped),
        unit_price=unit_price(item, variation, grouped, now),
    )
    return CartState(lines=[*state.lines, line])


def remove_from_cart(state, line_id) -> CartState:
    """Drop a line. Removing a line that is not in the cart changes nothing."""
    if find_line(state, line_id) is None:
        return state
    return CartState(lines=[line for line in state.lines if line.id != str(line_id)])


def update_quantity(state, line_id, quantity) -> CartState:
    """Set a line's quantity exactly; zero or less removes the line."""
    if quantity is not None and not isinstance(quantity, bool) and quantity <= 0:
        return remove_from_cart(state, line_id)

    line = find_line(state, line_id)
    if line is None:
        return state

    quantity = _normalize_quantity(quantity, line.is_measured)
    updated = line.replace(quantity=quantity)
    return CartState(lines=[updated if existing.id == line.id else existing for existing in state.lines])


def clear_cart(state=None) -> CartState:
    return CartState()


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)  # browsing session that owns the cart
    lines = List(content_type=ValueObject(CartLine))
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    @property
    def state(self) -> CartState:
        return CartState(lines=list(self.lines))

    def _apply(self, state):
        self.lines = list(state.lines)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, item, quantity=1, variation=None, add_ons=None, now=None):
        """Add a selection, merging into an identical line if present; returns the line."""
        add_ons = tuple(add_ons or ())
        state = self.state
        key = line_key(item, variation, add_ons)
        merged = find_line(state, key.line_id) is not None

        state = add_to_cart(state, item, quantity, variation, add_ons, now=now)
        line = find_line(state, key.line_id)
        self._apply(state)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                line_id=line.id,
                item_id=item.id,
                quantity=quantity,
                unit_price=line.unit_price,
                merged=merged,
            )
        )
        return line

    def update_line_quantity(self, line_id, quantity):
        """Set a line's quantity; a quantity of zero or less removes the line.

        Returns the line as it was before the change, or ``None`` when the
        cart holds no such line.
        """
        line = find_line(self.state, line_id)
        if line is None:
            return None

        state = update_quantity(self.state, line_id, quantity)
        updated = find_line(state, line_id)
        self._apply(state)

        if updated is None:
            self.raise_(CartItemRemoved(cart_id=str(self.id), line_id=line.id))
        else:
            self.raise_(
                CartQuantityUpdated(
                    cart_id=str(self.id),
                    line_id=line.id,
                    previous_quantity=line.quantity,
                    new_quantity=updated.quantity,
                )
            )
        return line

    def remove_line(self, line_id):
        line = find_line(self.state, line_id)
        if line is None:
            return None

        self._apply(remove_from_cart(self.state, line_id))
        self.raise_(CartItemRemoved(cart_id=str(self.id), line_id=line.id))
        return line

    def clear(self):
        removed = len(self.lines)
        self._apply(clear_cart(self.state))
        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=removed))
