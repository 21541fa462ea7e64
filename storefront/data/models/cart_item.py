from sqlalchemy import Column, Integer, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    store_product_id = Column(Integer, ForeignKey("store_products.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    cart = relationship("CartModel", back_populates="items")
    store_product = relationship("StoreProductModel")

    __table_args__ = (UniqueConstraint("cart_id", "store_product_id", name="u_cart_store_product"),)
