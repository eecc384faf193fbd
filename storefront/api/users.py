from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.core_settings import Settings
from storefront.infrastructure.db import get_db
from storefront.application.access import AccessPolicy, Rule
from storefront.application.errors import NotFound
from storefront.application.users import UserService
from storefront.application.schemas import (
    UserCreate,
    UserCreateResult,
    UserRead,
    RoleRead,
    UpdateResult,
    DeleteResult,
)
from .deps import get_principal, get_policy, get_app_settings

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserCreateResult)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user on first sign-in; repeated calls are no-ops."""
    return UserService(db).find_or_create(payload)


@router.get("", response_model=list[UserRead])
def list_users(
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
):
    return UserService(db).list()


@router.get("/{email}", response_model=UserRead)
def get_user(
    email: str,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    user = UserService(db).get_by_email(email)
    if not user:
        raise NotFound("User not found")
    return user


@router.get("/{email}/role", response_model=RoleRead)
def get_user_role(
    email: str,
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.SELF_OR_ADMIN, email)
    return RoleRead(role=policy.role_of(email))


@router.patch("/admin/{user_id}", response_model=UpdateResult)
def make_admin(
    user_id: int,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    settings: Settings = Depends(get_app_settings),
):
    policy.enforce_role(principal, settings.USER_PROMOTE_ROLE)
    modified = UserService(db).promote_to_admin(user_id)
    return UpdateResult(matched_count=1, modified_count=modified)


@router.delete("/{user_id}", response_model=DeleteResult)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    settings: Settings = Depends(get_app_settings),
):
    policy.enforce_role(principal, settings.USER_DELETE_ROLE)
    return DeleteResult(deleted_count=UserService(db).delete(user_id))
