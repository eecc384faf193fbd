from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.infrastructure.db import get_db
from storefront.application.access import AccessPolicy, Rule
from storefront.application.stats import StatsService
from storefront.application.schemas import AdminStats
from .deps import get_principal, get_policy

router = APIRouter(tags=["admin"])


@router.get("/admin-stats", response_model=AdminStats)
def admin_stats(
    db: Session = Depends(get_db),
    principal: str = Depends(get_principal),
    policy: AccessPolicy = Depends(get_policy),
):
    policy.enforce(principal, Rule.ADMIN_ONLY)
    return StatsService(db).summary()
