# logicbuilders/domain/order_flow.py
from logicbuilders.domain.enums import OrderStatus as S

#customer may only cancel before shipping or ask for a return after delivery
CUSTOMER_TRANSITIONS = {
    S.PENDING: {S.CANCELLED},
    S.PROCESSING: {S.CANCELLED},
    S.DELIVERED: {S.AWAITING_RETURN},
}

ADMIN_TRANSITIONS = {
    S.PENDING: {S.PROCESSING, S.CANCELLED},
    S.PROCESSING: {S.SHIPPED, S.CANCELLED},
    S.SHIPPED: {S.DELIVERED},
    S.DELIVERED: {S.AWAITING_RETURN},
    S.AWAITING_RETURN: {S.RETURNED, S.RETURN_DECLINED},
}

#statuses in which the order's stock has already been taken off the shelf
STOCK_DEDUCTED = {S.PROCESSING, S.SHIPPED, S.DELIVERED, S.AWAITING_RETURN, S.RETURN_DECLINED}


def can_transition(table: dict, current: S, target: S) -> bool:
    return target in table.get(current, set())
