"""Cart line model with Decimal-based pricing."""
import copy
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from storefront.models import ShippingType
from storefront.services.money import to_decimal, multiply, round_money


@dataclass
class CartLineItem:
    """
    One distinguishable purchasable unit in the cart.

    `unit_price` already includes any customization surcharge and is
    frozen at add-time. `customization` is an opaque payload: only its
    presence matters to line identity.
    """
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    id: str = ""
    variant_id: Optional[str] = None
    image_url: str = ""
    size: Optional[str] = None
    color: Optional[str] = None
    customization: Optional[Dict[str, Any]] = None
    shipping_type: Optional[ShippingType] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        if isinstance(self.customization, BaseModel):
            self.customization = self.customization.model_dump(by_alias=True, exclude_none=True, mode="json")
        elif self.customization is not None:
            # Opaque payload, kept JSON-encodable for the slot
            self.customization = to_jsonable_python(self.customization)
        if self.shipping_type is not None and not isinstance(self.shipping_type, ShippingType):
            self.shipping_type = ShippingType(self.shipping_type)
        if not self.id:
            self.id = f"{self.product_id}-{self.variant_id or 'default'}-{uuid.uuid4().hex[:12]}"

    @property
    def is_customized(self) -> bool:
        return self.customization is not None

    @property
    def line_total(self) -> Decimal:
        """unit_price * quantity, rounded to cents."""
        return round_money(multiply(self.unit_price, self.quantity))

    def same_line(self, other: "CartLineItem") -> bool:
        """
        True when `other` should merge into this line.

        Customized lines never merge, even with an identical payload.
        """
        if self.is_customized or other.is_customized:
            return False
        return (
            self.product_id == other.product_id
            and self.size == other.size
            and self.color == other.color
        )

    def matches(
        self,
        product_id: str,
        size: Optional[str] = None,
        color: Optional[str] = None,
        customization_ref: Optional[str] = None,
    ) -> bool:
        """
        Target matching used by remove/update.

        With a customization reference only the customized line carrying
        that id matches; without one only an uncustomized line matches.
        """
        if self.product_id != product_id or self.size != size or self.color != color:
            return False
        if customization_ref is not None:
            return self.is_customized and self.id == customization_ref
        return not self.is_customized

    def copy(self) -> "CartLineItem":
        return replace(self, customization=copy.deepcopy(self.customization))

    def to_dict(self) -> dict:
        """Convert to the JSON record stored in the cart slot."""
        return {
            "id": self.id,
            "productId": self.product_id,
            "variantId": self.variant_id,
            "name": self.name,
            "price": str(self.unit_price),
            "quantity": self.quantity,
            "size": self.size,
            "color": self.color,
            "imageUrl": self.image_url,
            "customization": self.customization,
            "shippingType": self.shipping_type.value if self.shipping_type else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """
        Create from a stored record.

        Raises:
            KeyError, TypeError, ValueError: on a malformed record
        """
        if not isinstance(data, dict):
            raise TypeError(f"cart line must be an object, got {type(data).__name__}")
        return cls(
            id=data.get("id") or "",
            product_id=data["productId"],
            variant_id=data.get("variantId"),
            name=data.get("name", ""),
            unit_price=_parse_price(data["price"]),
            quantity=int(data["quantity"]),
            size=data.get("size"),
            color=data.get("color"),
            image_url=data.get("imageUrl") or "",
            customization=data.get("customization"),
            shipping_type=data.get("shippingType"),
        )


def _parse_price(value: Any) -> Decimal:
    """Strict price parsing for stored records; bad values raise ValueError."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"invalid price: {value!r}") from e
    if not price.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return price
