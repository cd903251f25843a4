"""
Pydantic Models - Data Schemas

Contains the Pydantic models used at the cart boundaries:
- Customization payloads attached to cart lines
- Checkout hand-off request for the external payment/order call
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Enums
# ============================================================

class ShippingType(str, Enum):
    """Delivery speed chosen on the product page (informational in the cart)."""
    NORMAL = "normal"
    FAST = "fast"
    URGENT = "urgent"


class MarkingType(str, Enum):
    """Marking technique applied to the garment."""
    IMPRESSION = "impression"
    BRODERIE = "broderie"  # Embroidery
    FLOCAGE = "flocage"  # Flock / vinyl


class ContentType(str, Enum):
    TEXT = "text"
    IMAGE = "image"


# ============================================================
# Customization payload
# ============================================================

class CustomizationUnit(BaseModel):
    """
    One placement of a customization (e.g. front text, back logo).

    Field aliases follow the storefront's JSON keys so stored payloads
    validate as-is. Unknown keys are kept.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    marking_type: str = Field("", alias="type_impression")
    content_type: ContentType = Field(ContentType.TEXT, alias="type")
    position: Optional[str] = None
    position_front: Optional[str] = Field(None, alias="position_avant")
    position_back: Optional[str] = Field(None, alias="position_arriere")
    text: Optional[str] = Field(None, alias="texte")
    text_color: Optional[str] = Field(None, alias="couleur_texte")
    font: Optional[str] = Field(None, alias="police")
    image_url: Optional[str] = None

    @property
    def placement(self) -> Optional[str]:
        """First non-empty position among the generic, front and back ones."""
        return self.position or self.position_front or self.position_back


class ProductCustomization(BaseModel):
    """Full customization of a product: every placement for front and back."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    product_id: Optional[str] = Field(None, alias="productId")
    customizations: List[CustomizationUnit] = Field(default_factory=list)


# ============================================================
# Checkout hand-off
# ============================================================

class ProductData(BaseModel):
    name: str
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PriceData(BaseModel):
    currency: str
    unit_amount: int  # Minor units (cents)
    product_data: ProductData


class CheckoutLineItem(BaseModel):
    """Payment line item as expected by the hosted payment page."""
    price_data: PriceData
    quantity: int


class OrderItem(BaseModel):
    """Line snapshot stored on the server-side order record."""
    product_id: str
    variant_id: Optional[str] = None
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None
    price: Decimal


class CheckoutRequest(BaseModel):
    """Plain data handed to the external checkout initiation call."""
    user_id: Optional[str] = None
    currency: str
    line_items: List[CheckoutLineItem]
    order_items: List[OrderItem]
    subtotal: Decimal
    shipping_fee: Decimal
    total_amount: Decimal
    shipping_details: Optional[Dict[str, Any]] = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None
