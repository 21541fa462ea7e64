from sqlalchemy import Column, Integer, String, Float, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class StoreModel(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_translations = Column(JSON, nullable=False, default=dict)

    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    country = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)

    zones = relationship(
        "ZoneStoreModel",
        back_populates="store",
        cascade="all, delete-orphan",
    )
    products = relationship(
        "StoreProductModel",
        back_populates="store",
        cascade="all, delete-orphan",
    )
