# logicbuilders/api/__init__.py
from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from logicbuilders.api.routers import account, addresses, admin, builds, cart, health, orders
from logicbuilders.domain.errors import BusinessRuleViolation, ClearanceDenied, NotFound, ValidationFailed
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(cart.router)
api_router.include_router(orders.router)
api_router.include_router(account.router)
api_router.include_router(builds.router)
api_router.include_router(addresses.router)
api_router.include_router(admin.router)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"detail": message, "errors": jsonable_encoder(errors)})

    @app.exception_handler(ValidationFailed)
    async def validation_failed(request: Request, exc: ValidationFailed):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(BusinessRuleViolation)
    async def business_rule_violation(request: Request, exc: BusinessRuleViolation):
        logger.warning(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content=jsonable_encoder({"detail": str(exc), **exc.details}))

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ClearanceDenied)
    async def clearance_denied(request: Request, exc: ClearanceDenied):
        return JSONResponse(
            status_code=403,
            content={"detail": str(exc), "required": exc.required, "current": exc.current},
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} failed")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
