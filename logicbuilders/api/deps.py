# logicbuilders/api/deps.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from logicbuilders.data.database import get_db
from logicbuilders.domain.context import AdminContext, CustomerContext
from logicbuilders.domain.enums import Clearance
from logicbuilders.domain.errors import ClearanceDenied
from logicbuilders.services.auth_service import AuthService, InvalidToken, decode_token
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


def get_customer(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> CustomerContext:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Access token required")

    try:
        claims = decode_token(credentials.credentials)
        return AuthService(db).customer_context(claims)
    except InvalidToken as e:
        logger.info(f"Rejected customer token: {e}")
        raise HTTPException(status_code=403, detail="Invalid or expired token")


def get_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> AdminContext:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Access denied. No token provided.")

    try:
        claims = decode_token(credentials.credentials)
        return AuthService(db).admin_context(claims)
    except InvalidToken as e:
        logger.info(f"Rejected admin token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token.")


def require_clearance(required: Clearance):
    def dependency(admin: AdminContext = Depends(get_admin)) -> AdminContext:
        if not admin.permits(required):
            logger.warning(f"Admin {admin.admin_id} ({admin.clearance.value}) denied, needs {required.value}")
            raise ClearanceDenied(required=required.value, current=admin.clearance.value)
        return admin

    return dependency
