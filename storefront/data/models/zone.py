from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ZoneModel(Base):
    __tablename__ = "zones"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_translations = Column(JSON, nullable=False, default=dict)
    # [{"lat": .., "lng": ..}, ...], first vertex is not repeated
    coordinates = Column(JSON, nullable=False, default=list)

    stores = relationship(
        "ZoneStoreModel",
        back_populates="zone",
        cascade="all, delete-orphan",
    )
    users = relationship("UserModel", back_populates="zone")
