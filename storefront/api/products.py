from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.core_settings import Settings
from storefront.infrastructure.db import get_db
from storefront.application.access import AccessPolicy, Rule
from storefront.application.products import ProductService
from storefront.application.schemas import ProductCreate, ProductUpdate, ProductRead, DeleteResult
from .deps import get_principal, get_policy, get_app_settings

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductRead])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list()


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductService(db).require(product_id)


@router.post("", response_model=ProductRead)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.MANAGER_ONLY)
    return ProductService(db).create(payload, created_by=principal)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    settings: Settings = Depends(get_app_settings),
):
    policy.enforce_role(principal, settings.PRODUCT_WRITE_ROLE)
    return ProductService(db).update(product_id, payload)


@router.delete("/{product_id}", response_model=DeleteResult)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
    settings: Settings = Depends(get_app_settings),
):
    policy.enforce_role(principal, settings.PRODUCT_WRITE_ROLE)
    return DeleteResult(deleted_count=ProductService(db).delete(product_id))
