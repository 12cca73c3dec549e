# logicbuilders/services/admin_order_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from logicbuilders.data.models.order import OrderModel
from logicbuilders.domain.context import AdminContext
from logicbuilders.domain.enums import OrderStatus
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.domain.order_flow import ADMIN_TRANSITIONS, STOCK_DEDUCTED, can_transition
from logicbuilders.domain.schemas import AdminOrderUpdateIn, BulkOrderUpdateIn
from logicbuilders.repos.order_repo import OrderRepo
from logicbuilders.services.audit_service import AuditService
from logicbuilders.services.inventory_service import InventoryService
from logicbuilders.services.order_service import order_row
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class AdminOrderService:
    """
    Back-office order workflow.

    Approving a pending order (pending -> processing) takes its product lines
    off the stock; cancelling an order whose stock was taken puts it back. Both
    happen in the same transaction as the status change.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.inventory = InventoryService(db)
        self.audit = AuditService(db)

    #query
    def list_orders(self, status: OrderStatus | None = None) -> List[Dict[str, Any]]:
        rows = self.repo.list_orders(status=status.value if status else None)
        return [order_row(order, count) for order, count in rows]

    def get_order(self, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order_detail(order_id)
        if not order:
            raise NotFound("Order not found")

        return {
            **order_row(order, len(order.items)),
            "customer_id": order.customer_id,
            "shipping_address": order.shipping_address,
            "items": order.items,
        }

    #commands
    def update_order(self, admin: AdminContext, order_id: int, payload: AdminOrderUpdateIn) -> Dict[str, Any]:
        if payload.status is None and payload.payment_status is None and payload.admin_notes is None:
            raise ValidationFailed("No fields to update")

        try:
            order = self.repo.get_order(order_id, for_update=True)
            if not order:
                raise NotFound("Order not found")

            stock_updated = self._apply(admin, order, payload, action="UPDATE_ORDER")
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return {
            "message": "Order updated successfully",
            "order": order_row(order, len(order.items)),
            "stock_updated": stock_updated,
        }

    def bulk_update(self, admin: AdminContext, payload: BulkOrderUpdateIn) -> Dict[str, Any]:
        """
        Apply one status/payment change to many orders with the same rules as
        update_order. A failing order is reported and skipped; the rest commit.
        """
        if payload.status is None and payload.payment_status is None:
            raise ValidationFailed("No fields to update")

        change = AdminOrderUpdateIn(status=payload.status, payment_status=payload.payment_status)
        results = []
        try:
            for order_id in payload.order_ids:
                order = self.repo.get_order(order_id, for_update=True)
                if not order:
                    results.append({"order_id": order_id, "success": False, "error": "Order not found"})
                    continue
                try:
                    self._apply(admin, order, change, action="BULK_UPDATE_ORDER")
                except BusinessRuleViolation as e:
                    results.append({"order_id": order_id, "success": False, "error": str(e)})
                    continue
                results.append({"order_id": order_id, "success": True})
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        succeeded = sum(1 for r in results if r["success"])
        failed = len(results) - succeeded
        logger.info(f"Admin {admin.admin_id} bulk-updated orders: {succeeded} ok, {failed} failed")

        return {
            "message": f"Bulk update completed. Success: {succeeded}, Errors: {failed}",
            "results": results,
            "summary": {"success": succeeded, "errors": failed},
        }

    def _apply(self, admin: AdminContext, order: OrderModel, payload: AdminOrderUpdateIn, action: str) -> bool:
        #raises before touching the order or the stock when the change is not allowed
        current = OrderStatus(order.status)
        target = payload.status
        stock_updated = False

        if target is not None and target is not current:
            if not can_transition(ADMIN_TRANSITIONS, current, target):
                raise BusinessRuleViolation(
                    f"Cannot change order status from {current.value} to {target.value}",
                    current=current.value,
                    requested=target.value,
                )

            if current is OrderStatus.PENDING and target is OrderStatus.PROCESSING:
                self.inventory.deduct_for_order(order.id)
                stock_updated = True
            elif target is OrderStatus.CANCELLED and current in STOCK_DEDUCTED:
                self.inventory.restore_for_order(order.id)
                stock_updated = True

            order.status = target.value

        if payload.payment_status is not None:
            order.payment_status = payload.payment_status
        if payload.admin_notes is not None:
            order.admin_notes = payload.admin_notes

        self.audit.record(
            admin,
            action,
            "ORDER",
            order.id,
            old_status=current.value,
            new_status=order.status,
            payment_status=order.payment_status,
            stock_updated=stock_updated,
        )
        logger.info(
            f"Admin {admin.admin_id} updated order {order.id}: status {current.value} -> {order.status}, "
            f"payment_status={order.payment_status}, stock_updated={stock_updated}"
        )
        return stock_updated
