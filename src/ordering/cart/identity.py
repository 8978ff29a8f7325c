"""Line identity: when two add-to-cart requests refer to the same cart line.

A line is identified by the catalog item, the chosen variation (or
``"default"``), and the multiset of chosen add-ons (or ``"none"``). The
add-on multiset is canonical: selections are grouped by add-on id with their
counts summed, then sorted by id, so the order in which a customer tapped the
add-ons never changes identity.

The string form of a key escapes each id before joining, so ids that contain
the separators themselves still give distinct line ids.
"""

from urllib.parse import quote

from protean.fields import Float, Integer, String

from catalogue.item.item import AddOnCategory
from ordering.domain import ordering

DEFAULT_VARIATION = "default"
NO_ADD_ONS = "none"


@ordering.value_object
class SelectedAddOn:
    """An add-on chosen for a line, with how many times it was chosen."""

    id: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    price: Float(min_value=0.0, default=0.0)
    category: String(choices=AddOnCategory, default=AddOnCategory.EXTRAS.value)
    quantity: Integer(min_value=1, default=1)


def _escape(part) -> str:
    return quote(str(part), safe="")


@ordering.value_object
class LineKey:
    item_id: String(required=True, sanitize=False)
    variation_id: String(default=DEFAULT_VARIATION, sanitize=False)
    add_ons: tuple[tuple[str, int], ...] = ()

    @property
    def line_id(self) -> str:
        """Deterministic string form, used to address the line."""
        add_ons = ",".join(f"{_escape(add_on_id)}={quantity}" for add_on_id, quantity in self.add_ons)
        return "|".join((_escape(self.item_id), _escape(self.variation_id), add_ons or NO_ADD_ONS))

    def __str__(self):
        return self.line_id


def group_add_ons(add_ons) -> tuple[SelectedAddOn, ...]:
    """Collapse repeated selections into one ``SelectedAddOn`` per add-on id.

    A plain ``AddOn`` counts as one selection; a ``SelectedAddOn`` counts as
    its quantity. Groups keep the order in which each add-on was first chosen.
    """
    counts = {}
    first_seen = {}
    for add_on in add_ons or ():
        count = add_on.quantity if isinstance(add_on, SelectedAddOn) else 1
        counts[add_on.id] = counts.get(add_on.id, 0) + count
        first_seen.setdefault(add_on.id, add_on)

    return tuple(
        SelectedAddOn(
            id=add_on.id,
            name=add_on.name,
            price=add_on.price,
            category=add_on.category,
            quantity=counts[add_on_id],
        )
        for add_on_id, add_on in first_seen.items()
    )


def add_on_key(add_ons) -> tuple[tuple[str, int], ...]:
    """Sorted ``(add_on_id, quantity)`` pairs for a selection."""
    return tuple(sorted((add_on.id, add_on.quantity) for add_on in group_add_ons(add_ons)))


def line_key(item, variation=None, add_ons=None) -> LineKey:
    return LineKey(
        item_id=item.id,
        variation_id=variation.id if variation is not None else DEFAULT_VARIATION,
        add_ons=add_on_key(add_ons),
    )
