from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storefront.domain.models import User, ROLE_ADMIN
from storefront.core import get_logger
from .schemas import UserCreate, UserCreateResult
from .errors import NotFound
from typing import Optional

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return self.db.query(User).order_by(User.id).all()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_or_create(self, data: UserCreate) -> UserCreateResult:
        if self.get_by_email(data.email):
            return UserCreateResult(message="user already exists", inserted_id=None)
        user = User(email=data.email, name=data.name, photo_url=data.photo_url)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent first sign-in created this user first
            self.db.rollback()
            logger.info(f"User {data.email} created concurrently")
            return UserCreateResult(message="user already exists", inserted_id=None)
        self.db.refresh(user)
        logger.info(f"User {user.email} created")
        return UserCreateResult(inserted_id=user.id)

    def promote_to_admin(self, user_id: int) -> int:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        modified = user.role != ROLE_ADMIN
        user.role = ROLE_ADMIN
        self.db.commit()
        logger.info(f"User {user.email} promoted to admin")
        return int(modified)

    def delete(self, user_id: int) -> int:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        self.db.delete(user)
        self.db.commit()
        logger.info(f"User {user.email} deleted")
        return 1
