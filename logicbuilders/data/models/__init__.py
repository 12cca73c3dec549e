#import all models so SQLAlchemy registers them in Base.metadata

from logicbuilders.data.models.customer import CustomerModel
from logicbuilders.data.models.admin_user import AdminUserModel
from logicbuilders.data.models.admin_log import AdminLogModel
from logicbuilders.data.models.product import ProductCategoryModel, ProductModel, ProductAttributeModel
from logicbuilders.data.models.build import BuildModel, BuildProductModel
from logicbuilders.data.models.cart import CartModel
from logicbuilders.data.models.cart_item import CartItemModel
from logicbuilders.data.models.shipping_address import ShippingAddressModel
from logicbuilders.data.models.order import OrderModel, OrderItemModel
from logicbuilders.data.models.promotion import PromoModel, PromotionModel, PromotionUsageModel
from logicbuilders.data.models.voucher import VoucherModel
from logicbuilders.data.models.points import CustomerPointsModel, PointsTransactionModel
from logicbuilders.data.models.notification import NotificationModel

__all__ = [
    "CustomerModel",
    "AdminUserModel",
    "AdminLogModel",
    "ProductCategoryModel",
    "ProductModel",
    "ProductAttributeModel",
    "BuildModel",
    "BuildProductModel",
    "CartModel",
    "CartItemModel",
    "ShippingAddressModel",
    "OrderModel",
    "OrderItemModel",
    "PromoModel",
    "PromotionModel",
    "PromotionUsageModel",
    "VoucherModel",
    "CustomerPointsModel",
    "PointsTransactionModel",
    "NotificationModel",
]
