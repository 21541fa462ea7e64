# storefront/repos/store_repo.py
from typing import List

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from storefront.data.models.store import StoreModel
from storefront.data.models.store_product import StoreProductModel


class StoreRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_store(self, store_id: int) -> StoreModel | None:
        return self.db.get(StoreModel, store_id)

    def list_stores(self, search: str | None = None) -> List[StoreModel]:
        stmt = select(StoreModel).order_by(StoreModel.name)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    StoreModel.name.ilike(pattern),
                    StoreModel.name_translations["en"].as_string().ilike(pattern),
                )
            )
        return self.db.execute(stmt).scalars().all()

    def create_store(self, store: StoreModel) -> StoreModel:
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        return store

    def get_product(self, product_id: int) -> StoreProductModel | None:
        return self.db.get(StoreProductModel, product_id)

    def create_product(self, product: StoreProductModel) -> StoreProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
