"""
Customization pricing.

Flat surcharges per placement, in euros:
- marking: embroidery 10, flock/vinyl 5
- text: 2 up to 10 chars, 3 up to 20, 5 beyond
- image: 7, on top of any text surcharge

The total for a line is the sum over all its placements. It is frozen
into the line's unit price at add-time.
"""
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Union

from storefront.models import ContentType, CustomizationUnit, MarkingType, ProductCustomization

MARKING_SURCHARGES = {
    MarkingType.BRODERIE.value: Decimal("10"),
    MarkingType.FLOCAGE.value: Decimal("5"),
}

SHORT_TEXT_MAX = 10
MEDIUM_TEXT_MAX = 20
SHORT_TEXT_SURCHARGE = Decimal("2")
MEDIUM_TEXT_SURCHARGE = Decimal("3")
LONG_TEXT_SURCHARGE = Decimal("5")

IMAGE_SURCHARGE = Decimal("7")

UnitLike = Union[CustomizationUnit, Mapping[str, Any]]
CustomizationLike = Union[ProductCustomization, CustomizationUnit, Mapping[str, Any], Iterable[UnitLike], None]


def _as_unit(unit: UnitLike) -> CustomizationUnit:
    if isinstance(unit, CustomizationUnit):
        return unit
    return CustomizationUnit.model_validate(unit)


def _units(customization: CustomizationLike) -> List[CustomizationUnit]:
    """Normalize a payload, a ProductCustomization or a list of placements."""
    if customization is None:
        return []
    if isinstance(customization, ProductCustomization):
        return list(customization.customizations)
    if isinstance(customization, CustomizationUnit):
        return [customization]
    if isinstance(customization, Mapping):
        return ProductCustomization.model_validate(customization).customizations
    return [_as_unit(unit) for unit in customization]


def text_surcharge(text: Optional[str]) -> Decimal:
    if not text:
        return Decimal("0")
    if len(text) <= SHORT_TEXT_MAX:
        return SHORT_TEXT_SURCHARGE
    if len(text) <= MEDIUM_TEXT_MAX:
        return MEDIUM_TEXT_SURCHARGE
    return LONG_TEXT_SURCHARGE


def customization_surcharge(unit: UnitLike) -> Decimal:
    """Surcharge for one placement."""
    unit = _as_unit(unit)
    surcharge = MARKING_SURCHARGES.get(unit.marking_type, Decimal("0"))
    surcharge += text_surcharge(unit.text)
    if unit.image_url:
        surcharge += IMAGE_SURCHARGE
    return surcharge


def total_customization_surcharge(customization: CustomizationLike) -> Decimal:
    """Sum of the surcharges of every placement attached to a line."""
    return sum((customization_surcharge(unit) for unit in _units(customization)), Decimal("0"))


def is_customization_complete(customization: CustomizationLike) -> bool:
    """
    True when every placement can be produced as-is.

    A placement needs a marking type and a position, plus its text or
    its image depending on the content type. An empty payload is never
    complete.
    """
    units = _units(customization)
    if not units:
        return False

    for unit in units:
        if not unit.marking_type or not unit.placement:
            return False
        if unit.content_type == ContentType.TEXT and not unit.text:
            return False
        if unit.content_type == ContentType.IMAGE and not unit.image_url:
            return False
    return True


def describe_customization(unit: UnitLike) -> str:
    """Short French description shown under the cart line."""
    unit = _as_unit(unit)
    elements = ["Broderie" if unit.marking_type == MarkingType.BRODERIE.value else "Flocage"]
    elements.append(f"Position: {unit.placement}")

    if unit.text:
        elements.append(f'Texte: "{unit.text}"')
        elements.append(f"Couleur: {unit.text_color}")
        elements.append(f"Police: {unit.font}")
    elif unit.image_url:
        elements.append("Image personnalisée")

    return ", ".join(elements)
