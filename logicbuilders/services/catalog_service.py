# logicbuilders/services/catalog_service.py
from dataclasses import dataclass
from typing import Iterable, List

from logicbuilders.data.models.cart_item import CartItemModel
from logicbuilders.domain.errors import BusinessRuleViolation


@dataclass(frozen=True)
class LineProblem:
    product_id: int
    reason: str  # unavailable | insufficient_stock
    available: int | None = None
    requested: int | None = None


def check_availability(lines: Iterable[CartItemModel], enforce_stock: bool = False) -> List[LineProblem]:
    """
    Re-check at checkout time that every product line can still be bought.

    Build lines are not checked. Live stock is only compared with the line
    quantity when enforce_stock is set.
    """
    problems = []
    for line in lines:
        if line.product_id is None:
            continue

        product = line.product
        if product is None or not product.availability:
            problems.append(LineProblem(product_id=line.product_id, reason="unavailable"))
            continue

        if enforce_stock:
            stock = product.attribute.stock if product.attribute else 0
            if stock < line.quantity:
                problems.append(
                    LineProblem(
                        product_id=line.product_id,
                        reason="insufficient_stock",
                        available=stock,
                        requested=line.quantity,
                    )
                )
    return problems


def ensure_available(lines: Iterable[CartItemModel], enforce_stock: bool = False) -> None:
    problems = check_availability(lines, enforce_stock=enforce_stock)
    if not problems:
        return

    first = problems[0]
    if first.reason == "unavailable":
        raise BusinessRuleViolation(
            f"Product {first.product_id} is not available",
            product_ids=[p.product_id for p in problems],
        )
    raise BusinessRuleViolation(
        f"Insufficient stock for product ID {first.product_id}. "
        f"Available: {first.available}, Requested: {first.requested}",
        product_ids=[p.product_id for p in problems],
    )
