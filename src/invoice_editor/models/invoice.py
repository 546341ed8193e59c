"""
Invoice editing model and payload serialization helpers.

This module owns the editable invoice and keeps its derived totals in step
with every edit. The hierarchy is:

    InvoiceModel
    ├── customer_name / customer_address (free text)
    ├── tax_rate (percentage, 18.0 means 18%)
    ├── LineItem[] (description, quantity, unit price, derived line total)
    └── Totals (subtotal, tax amount, grand total)

Every mutator finishes by calling recompute_totals(), so a model read after
any operation never exposes stale totals. Raw user input is clamped into
range rather than rejected.

Serialization functions convert the model into the camelCase payload posted
to the PDF backend, including the pre-serialized ``itemsPayload`` string.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Sequence

from invoice_editor.lib import logs, objects
from invoice_editor.utils import (
    MIN_QUANTITY,
    MIN_UNIT_PRICE,
    NumericInput,
    parse_quantity,
    parse_tax_rate,
    parse_unit_price,
)

LOG = logs.logger(__file__)

NEW_ITEM_DESCRIPTION = "New Item"

# Payload key -> attribute name; snake_case aliases are accepted as well
_CUSTOMER_FIELDS = {
    "customerName": "customer_name",
    "customer_name": "customer_name",
    "customerAddress": "customer_address",
    "customer_address": "customer_address",
}
_ITEM_FIELDS = {
    "description": "description",
    "quantity": "quantity",
    "unitPrice": "unit_price",
    "unit_price": "unit_price",
}


@dataclass(frozen=True, slots=True)
class LineItem:
    """
    A single invoice line.

    Items are immutable; an edit replaces the item, so quantity and unit
    price pass through clamping on every change.
    """

    description: str = ""
    quantity: int = MIN_QUANTITY
    unit_price: float = MIN_UNIT_PRICE

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", parse_quantity(self.quantity))
        object.__setattr__(self, "unit_price", parse_unit_price(self.unit_price))

    @property
    def line_total(self) -> float:
        """Return quantity multiplied by unit price."""
        return self.quantity * self.unit_price

    def to_dict(self) -> dict:
        """Convert the item into its camelCase payload mapping."""
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "lineTotal": self.line_total,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        """
        Build an item from a payload mapping.

        Any supplied ``lineTotal`` is ignored; it is always derived.
        """
        return cls(
            description=str(data.get("description") or ""),
            quantity=data.get("quantity"),
            unit_price=data.get("unitPrice", data.get("unit_price")),
        )


@dataclass(frozen=True, slots=True)
class Totals:
    """Derived monetary totals for an invoice."""

    sub_total: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0


def compute_totals(items: Iterable[LineItem], tax_rate: float) -> Totals:
    """
    Compute invoice totals from line items and a tax rate.

    Args:
        items: Line items to sum.
        tax_rate: Tax percentage applied to the subtotal.

    Returns:
        Totals with subtotal, tax amount and grand total.
    """
    sub_total = sum(item.line_total for item in items)
    tax_amount = sub_total * tax_rate / 100
    return Totals(
        sub_total=sub_total,
        tax_amount=tax_amount,
        total_amount=sub_total + tax_amount,
    )


class InvoiceModel:
    """
    Editable invoice with synchronously recomputed totals.

    Line items are immutable, so update_item() is the only way to change
    one. The item list always holds at least one line. Out-of-range indices and
    unknown field names are programming errors and raise; bad numeric input
    is clamped and never raises.
    """

    def __init__(
        self,
        customer_name: str = "",
        customer_address: str = "",
        tax_rate: NumericInput = 0.0,
        items: Sequence[LineItem] | None = None,
    ) -> None:
        self.customer_name = customer_name
        self.customer_address = customer_address
        self._tax_rate = parse_tax_rate(tax_rate) or 0.0
        self._items: list[LineItem] = list(items) if items else [_new_item()]
        self._totals = Totals()
        self.recompute_totals()

    @property
    def tax_rate(self) -> float:
        return self._tax_rate

    @property
    def items(self) -> tuple[LineItem, ...]:
        """Return the line items in display order."""
        return tuple(self._items)

    @property
    def totals(self) -> Totals:
        return self._totals

    @property
    def sub_total(self) -> float:
        return self._totals.sub_total

    @property
    def tax_amount(self) -> float:
        return self._totals.tax_amount

    @property
    def total_amount(self) -> float:
        return self._totals.total_amount

    def set_customer_field(self, field: str, value: str) -> None:
        """
        Assign a customer name or address verbatim.

        Args:
            field: "customerName" or "customerAddress" (snake_case accepted).
            value: New text.

        Raises:
            ValueError: If the field is not a customer field.
        """
        try:
            attribute = _CUSTOMER_FIELDS[field]
        except KeyError as exc:
            msg = f"Unknown customer field: {field}"
            raise ValueError(msg) from exc
        setattr(self, attribute, value)

    def set_tax_rate(self, value: NumericInput) -> None:
        """
        Set the tax rate, keeping the previous rate for unusable input.

        Args:
            value: Raw tax percentage.
        """
        rate = parse_tax_rate(value)
        if rate is None:
            LOG.debug(
                "set_tax_rate - rejected value:%r keeping:%s", value, self._tax_rate
            )
        else:
            self._tax_rate = rate
        self.recompute_totals()

    def update_item(self, index: int, field: str, value: NumericInput) -> LineItem:
        """
        Edit one field of the line item at index.

        Quantity is clamped to at least 1 and unit price to at least 0.

        Args:
            index: Position of the item.
            field: "description", "quantity" or "unitPrice".
            value: Raw input for the field.

        Returns:
            The replacement line item now stored at index.

        Raises:
            IndexError: If index does not address an existing item.
            ValueError: If field is not an item field.
        """
        item = self._item_at(index)
        try:
            attribute = _ITEM_FIELDS[field]
        except KeyError as exc:
            msg = f"Unknown line item field: {field}"
            raise ValueError(msg) from exc

        if attribute == "description":
            item = replace(item, description="" if value is None else str(value))
        else:
            item = replace(item, **{attribute: value})
        self._items[index] = item
        LOG.debug(
            "update_item - index:%s field:%s value:%r stored:%r",
            index,
            field,
            value,
            getattr(item, attribute),
        )
        self.recompute_totals()
        return item

    def add_item(self) -> LineItem:
        """Append a default line item and return it."""
        item = _new_item()
        self._items.append(item)
        self.recompute_totals()
        return item

    def remove_item(self, index: int) -> bool:
        """
        Remove the line item at index.

        Returns:
            False when the item is the last one and was kept, True otherwise.

        Raises:
            IndexError: If index does not address an existing item.
        """
        self._item_at(index)
        if len(self._items) == 1:
            LOG.debug("remove_item - rejected, invoice needs at least one item")
            return False
        del self._items[index]
        self.recompute_totals()
        return True

    def recompute_totals(self) -> Totals:
        """Recompute and store the invoice totals."""
        self._totals = compute_totals(self._items, self._tax_rate)
        return self._totals

    def to_payload(self) -> dict:
        """
        Serialize the invoice into the backend transmission payload.

        Returns:
            JSON-compatible dictionary with structured ``items`` and the same
            list encoded as the ``itemsPayload`` string.
        """
        items = [item.to_dict() for item in self._items]
        return {
            "customerName": self.customer_name,
            "customerAddress": self.customer_address,
            "taxRate": self._tax_rate,
            "subTotal": self.sub_total,
            "taxAmount": self.tax_amount,
            "totalAmount": self.total_amount,
            "items": items,
            "itemsPayload": serialize_items(self._items),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "InvoiceModel":
        """
        Rebuild a model from a payload produced by to_payload().

        Structured ``items`` are preferred; ``itemsPayload`` is decoded when
        they are absent. Derived totals in the payload are ignored.
        """
        raw_items = payload.get("items")
        if raw_items is None:
            items = deserialize_items(payload.get("itemsPayload") or "[]")
        else:
            items = [LineItem.from_dict(item) for item in raw_items]
        return cls(
            customer_name=payload.get("customerName") or "",
            customer_address=payload.get("customerAddress") or "",
            tax_rate=payload.get("taxRate"),
            items=items,
        )

    def _item_at(self, index: int) -> LineItem:
        if not 0 <= index < len(self._items):
            msg = f"Line item index out of range: {index}"
            raise IndexError(msg)
        return self._items[index]

    def __repr__(self) -> str:
        return (
            f"InvoiceModel(customer_name={self.customer_name!r}, "
            f"items={len(self._items)}, total_amount={self.total_amount})"
        )


def _new_item() -> LineItem:
    return LineItem(description=NEW_ITEM_DESCRIPTION)


def serialize_items(items: Iterable[LineItem]) -> str:
    """Encode line items as the JSON string used for ``itemsPayload``."""
    return objects.to_json([item.to_dict() for item in items])


def deserialize_items(text: str) -> list[LineItem]:
    """Decode an ``itemsPayload`` string back into line items."""
    return [LineItem.from_dict(item) for item in objects.from_json(text)]
