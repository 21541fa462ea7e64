from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class StoreProductModel(Base):
    """A product as offered (and priced) by one store."""

    __tablename__ = "store_products"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    name_translations = Column(JSON, nullable=False, default=dict)
    price = Column(Numeric(10, 2), nullable=False)

    store = relationship("StoreModel", back_populates="products")
