# logicbuilders/services/inventory_service.py
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy.orm import Session

from logicbuilders.data.models.product import ProductAttributeModel
from logicbuilders.domain.components import parse_specs
from logicbuilders.domain.context import AdminContext
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.repos.order_repo import OrderRepo
from logicbuilders.repos.product_repo import ProductRepo
from logicbuilders.services.audit_service import AuditService
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    """
    Stock movements tied to the order workflow, plus admin stock/spec edits.
    deduct_for_order/restore_for_order run inside the caller's transaction.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)
        self.audit = AuditService(db)

    def deduct_for_order(self, order_id: int) -> None:
        """Take every product line off the stock, or nothing if any line is short."""
        lines = self.orders.get_product_lines(order_id)
        attributes = {}
        for line in lines:
            attribute = self.products.get_attribute(line.product_id, for_update=True)
            product = self.products.get_product(line.product_id)
            name = product.name if product else f"#{line.product_id}"

            if attribute is None:
                raise BusinessRuleViolation(f"Product attribute not found for product: {name}")

            if attribute.stock < line.quantity:
                raise BusinessRuleViolation(
                    f"Insufficient stock for {name}. Available: {attribute.stock}, Required: {line.quantity}",
                    available=attribute.stock,
                    required=line.quantity,
                )
            attributes[line.id] = attribute

        for line in lines:
            attribute = attributes[line.id]
            attribute.stock -= line.quantity
            logger.info(f"Stock of product {line.product_id} -{line.quantity} -> {attribute.stock} (order {order_id})")
        self.db.flush()

    def restore_for_order(self, order_id: int) -> None:
        for line in self.orders.get_product_lines(order_id):
            attribute = self.products.get_attribute(line.product_id, for_update=True)
            if attribute is None:
                logger.warning(f"No stock record for product {line.product_id}, nothing to restore")
                continue
            attribute.stock += line.quantity
            logger.info(f"Stock of product {line.product_id} +{line.quantity} -> {attribute.stock} (order {order_id})")
        self.db.flush()

    def set_stock(self, admin: AdminContext, product_id: int, stock: int) -> Dict[str, Any]:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        attribute = product.attribute or self.products.add_attribute(ProductAttributeModel(product_id=product_id, stock=0))
        old = attribute.stock
        attribute.stock = stock
        self.audit.record(admin, "UPDATE_STOCK", "PRODUCT", product_id, old_stock=old, new_stock=stock)
        self.db.commit()

        logger.info(f"Stock of product {product_id} set {old} -> {stock}")
        return {"product_id": product_id, "stock": stock}

    def set_specs(self, admin: AdminContext, product_id: int, raw: dict) -> Dict[str, Any]:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        category_name = product.category.name if product.category else None
        try:
            specs = parse_specs(category_name, raw)
        except ValidationError as e:
            raise ValidationFailed(f"Invalid specs for category {category_name}: {e.errors()[0]['msg']}") from e

        product.specs = specs.model_dump(exclude_none=True)
        self.audit.record(admin, "UPDATE_PRODUCT_SPECS", "PRODUCT", product_id, category=specs.category)
        self.db.commit()

        return {"product_id": product_id, "category": specs.category, "specs": product.specs}
