from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def update_user(self, user: UserModel, **fields) -> UserModel:
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.flush()
        return user
