#import every model so SQLAlchemy registers it in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.zone import ZoneModel
from storefront.data.models.store import StoreModel
from storefront.data.models.zone_store import ZoneStoreModel
from storefront.data.models.store_product import StoreProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel

__all__ = [
    "UserModel",
    "ZoneModel",
    "StoreModel",
    "ZoneStoreModel",
    "StoreProductModel",
    "CartModel",
    "CartItemModel",
]
