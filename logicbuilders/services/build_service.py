# logicbuilders/services/build_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from logicbuilders.data.models.build import BuildModel, BuildProductModel
from logicbuilders.domain.components import BuildValidation, validate_build
from logicbuilders.domain.context import CustomerContext
from logicbuilders.domain.errors import BusinessRuleViolation, NotFound, ValidationFailed
from logicbuilders.repos.build_repo import BuildRepo
from logicbuilders.repos.product_repo import ProductRepo
from logicbuilders.utils.logging import get_logger

logger = get_logger(__name__)


class BuildService:
    def __init__(self, db: Session):
        self.repo = BuildRepo(db)
        self.products = ProductRepo(db)

    #query
    def list_builds(self, ctx: CustomerContext) -> List[Dict[str, Any]]:
        return [self._summary(build) for build in self.repo.list_builds(ctx.customer_id)]

    def get_build(self, ctx: CustomerContext, build_id: int) -> Dict[str, Any]:
        build = self._owned(ctx, build_id)
        lines = self.repo.get_build_products(build.id)
        validation = self._validate(lines)

        return {
            **self._summary(build, lines),
            "products": [
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "name": line.product.name,
                    "price": line.product.price,
                    "quantity": line.quantity,
                    "category_name": line.product.category.name,
                }
                for line in lines
            ],
            "validation": {"is_valid": validation.is_valid, "missing": validation.missing},
        }

    def validate(self, ctx: CustomerContext, build_id: int) -> BuildValidation:
        build = self._owned(ctx, build_id)
        return self._validate(self.repo.get_build_products(build.id))

    #commands
    def create_build(self, ctx: CustomerContext, name: str) -> Dict[str, Any]:
        build = self.repo.add(BuildModel(customer_id=ctx.customer_id, name=name))
        self.repo.commit()
        logger.info(f"Build {build.id} created for customer {ctx.customer_id}")
        return self._summary(build, [])

    def rename_build(self, ctx: CustomerContext, build_id: int, name: str | None) -> Dict[str, Any]:
        if name is None:
            raise ValidationFailed("No fields to update")
        build = self._owned(ctx, build_id)
        build.name = name
        self.repo.commit()
        return self._summary(build)

    def add_product(self, ctx: CustomerContext, build_id: int, product_id: int, quantity: int) -> None:
        build = self._owned(ctx, build_id)

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        if not product.availability:
            raise BusinessRuleViolation("Product is not available")

        existing = self.repo.get_build_product(build.id, product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.repo.add(BuildProductModel(build_id=build.id, product_id=product_id, quantity=quantity))
        self.repo.commit()

        logger.info(f"Product {product_id} x{quantity} added to build {build.id}")

    def remove_product(self, ctx: CustomerContext, build_id: int, product_id: int) -> None:
        build = self._owned(ctx, build_id)
        line = self.repo.get_build_product(build.id, product_id)
        if not line:
            raise NotFound("Product not found in build")
        self.repo.delete(line)
        self.repo.commit()

    def delete_build(self, ctx: CustomerContext, build_id: int) -> None:
        build = self._owned(ctx, build_id)
        self.repo.delete(build)
        self.repo.commit()
        logger.info(f"Build {build_id} deleted by customer {ctx.customer_id}")

    #helpers, also used by the cart
    def purchasable_price(self, ctx: CustomerContext, build_id: int):
        """Derived price of an owned build that passes validation."""
        build = self._owned(ctx, build_id)
        validation = self._validate(self.repo.get_build_products(build.id))
        if not validation.is_valid:
            raise BusinessRuleViolation(
                f"Build is missing required components: {', '.join(validation.missing)}",
                missing=validation.missing,
            )
        return self.repo.build_price(build.id)

    def _owned(self, ctx: CustomerContext, build_id: int) -> BuildModel:
        build = self.repo.get_owned_build(build_id, ctx.customer_id)
        if not build:
            raise NotFound("Build not found")
        return build

    def _validate(self, lines: List[BuildProductModel]) -> BuildValidation:
        return validate_build(line.product.category.name for line in lines)

    def _summary(self, build: BuildModel, lines: List[BuildProductModel] | None = None) -> Dict[str, Any]:
        if lines is None:
            lines = self.repo.get_build_products(build.id)
        return {
            "id": build.id,
            "name": build.name,
            "created_at": build.created_at,
            "product_count": len(lines),
            "total_price": self.repo.build_price(build.id),
        }
