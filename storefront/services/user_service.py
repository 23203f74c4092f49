from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFound
from storefront.domain.schemas import UserCreate, UserRead
from storefront.repos.user_repo import UserRepo


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        #idempotentne po id - ponowna rejestracja zwraca pierwszy rekord
        existing = self.repo.get_user(payload.id)
        if existing:
            return UserRead.model_validate(existing)

        with transaction(self.db, "create user"):
            created = self.repo.add_user(UserModel(id=payload.id, name=payload.name))
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("user not found")
        return UserRead.model_validate(user)
