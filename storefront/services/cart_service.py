# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel, CART_SHOPPING, CART_CHECKED_OUT
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.store_repo import StoreRepo
from storefront.repos.user_repo import UserRepo
from storefront.repos.zone_repo import SqlZoneRepository
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Shopping cart use cases for the signed-in user.
    commands (add, remove, checkout) change state, get_cart only reads.
    A cart only ever holds products of stores linked to the owner's zone.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.users = UserRepo(db)
        self.stores = StoreRepo(db)
        self.zones = SqlZoneRepository(db)

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._active_cart(user_id)
        return self._cart_to_dict(cart)

    #commands
    def add_product(self, user_id: int, store_product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        product = self.stores.get_product(store_product_id)
        if not product:
            raise NotFoundError(f"Product {store_product_id} not found")

        user = self._get_user(user_id)
        allowed = self.zones.list_zone_store_ids(user.zone_id) if user.zone_id else set()
        if product.store_id not in allowed:
            raise ValidationError(f"Store {product.store_id} does not deliver to your zone")

        cart = self._active_cart(user_id)

        existing_item = self.repo.get_cart_item_by_product(cart.id, store_product_id)
        if existing_item:
            logger.info(
                f"Product {store_product_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
            existing_item.price = product.price
        else:
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    store_product_id=store_product_id,
                    quantity=quantity,
                    price=product.price,
                )
            )

        self._bump_version(cart, {})
        logger.info(f"Product {store_product_id} added to cart {cart.id}")

        return self.get_cart(user_id)

    def remove_item(self, user_id: int, item_id: int) -> Dict[str, Any]:
        cart = self._active_cart(user_id)

        item = self.repo.get_cart_item(cart.id, item_id)
        if not item:
            raise NotFoundError(f"Item {item_id} not in cart")

        self.repo.delete_cart_item(item)
        self._bump_version(cart, {})
        logger.info(f"Item {item_id} removed from cart {cart.id}")

        return self.get_cart(user_id)

    def checkout(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_active_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("No active cart")

        if not self.repo.get_cart_items(cart.id):
            raise ValidationError("Cannot check out an empty cart")

        self._bump_version(cart, {"status": CART_CHECKED_OUT})
        logger.info(f"Cart {cart.id} checked out")

        return self._cart_to_dict(self.repo.get_cart(cart.id))

    # helpers

    def _get_user(self, user_id: int):
        user = self.users.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _active_cart(self, user_id: int) -> CartModel:
        # at most one shopping cart per user
        cart = self.repo.get_active_cart_by_user(user_id)
        if cart:
            return cart

        self._get_user(user_id)
        created = self.repo.create_cart(CartModel(user_id=user_id, status=CART_SHOPPING, version=1))
        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    def _bump_version(self, cart: CartModel, new_data: Dict[str, Any]) -> None:
        # optimistic locking: UPDATE ... WHERE id = :id AND version = :version
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={**new_data, "version": cart.version + 1},
        )

        if rowcount == 0:
            self.repo.rollback()
            raise ConflictError("Cart was modified by another operation")

        self.repo.commit()

    def _cart_to_dict(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        total = sum((i.price * i.quantity for i in items), Decimal("0.00"))
        user = self.users.get_user(cart.user_id)

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status,
            "zone_id": user.zone_id if user else None,
            "items": [
                {
                    "id": i.id,
                    "store_product_id": i.store_product_id,
                    "store_id": i.store_product.store_id,
                    "name": i.store_product.name,
                    "quantity": i.quantity,
                    "price": i.price,
                }
                for i in items
            ],
            "total": total,
            "version": cart.version,
            "created_at": cart.created_at,
        }
