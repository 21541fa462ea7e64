from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ZoneStoreModel(Base):
    __tablename__ = "zone_stores"

    id = Column(Integer, primary_key=True)
    zone_id = Column(Integer, ForeignKey("zones.id", ondelete="CASCADE"), nullable=False, index=True)
    store_id = Column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True)

    zone = relationship("ZoneModel", back_populates="stores")
    store = relationship("StoreModel", back_populates="zones")

    __table_args__ = (UniqueConstraint("zone_id", "store_id", name="u_zone_store"),)
