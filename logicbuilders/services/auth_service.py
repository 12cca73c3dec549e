# logicbuilders/services/auth_service.py
import jwt
from sqlalchemy.orm import Session

from logicbuilders.data.models.customer import CustomerModel
from logicbuilders.domain.context import AdminContext, CustomerContext
from logicbuilders.domain.enums import Clearance
from logicbuilders.repos.customer_repo import CustomerRepo
from logicbuilders.utils import settings
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class InvalidToken(Exception):
    pass


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidToken(str(e)) from e


class AuthService:
    """Turns verified token claims into a request-scoped context."""

    def __init__(self, db: Session):
        self.repo = CustomerRepo(db)

    def customer_context(self, claims: dict) -> CustomerContext:
        user_id = claims.get("userId")
        if not isinstance(user_id, int):
            raise InvalidToken("Token has no userId")

        customer = self.repo.get_by_user_id(user_id)
        if customer is None:
            #first request of this user, customer row created lazily
            customer = self.repo.create(CustomerModel(user_id=user_id, username=claims.get("username")))
            logger.info(f"Created customer {customer.id} for user {user_id}")

        return CustomerContext(customer_id=customer.id, user_id=user_id, username=customer.username)

    def admin_context(self, claims: dict) -> AdminContext:
        admin = self.repo.get_admin(claims.get("admin_id")) if claims.get("admin_id") is not None else None
        if admin is None:
            raise InvalidToken("Unknown admin")

        try:
            clearance = Clearance(admin.clearance_level)
        except ValueError as e:
            raise InvalidToken(f"Unknown clearance level {admin.clearance_level}") from e

        return AdminContext(admin_id=admin.admin_id, name=admin.name, clearance=clearance)
