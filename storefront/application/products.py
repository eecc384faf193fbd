from sqlalchemy.orm import Session
from storefront.domain.models import Product
from storefront.core import get_logger
from .schemas import ProductCreate, ProductUpdate
from .errors import NotFound

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def list(self):
        return self.db.query(Product).order_by(Product.created_at.desc(), Product.id.desc()).all()

    def require(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFound("Product not found")
        return product

    def create(self, data: ProductCreate, created_by: str) -> Product:
        obj = Product(**data.model_dump(), created_by=created_by)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"Product {obj.id} created by {created_by}")
        return obj

    def update(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.require(product_id)
        # Update only provided fields
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product_id: int) -> int:
        product = self.require(product_id)
        self.db.delete(product)
        self.db.commit()
        logger.info(f"Product {product_id} deleted")
        return 1
