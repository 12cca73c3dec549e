# logicbuilders/domain/context.py
from dataclasses import dataclass

from logicbuilders.domain.enums import Clearance


@dataclass(frozen=True)
class CustomerContext:
    """Who is calling a storefront route; built per request from the bearer token."""

    customer_id: int
    user_id: int
    username: str | None = None


@dataclass(frozen=True)
class AdminContext:
    admin_id: int
    name: str
    clearance: Clearance

    def permits(self, required: Clearance) -> bool:
        return self.clearance.permits(required)
