"""Role-based access policy consulted by every protected endpoint.

Roles are read from the user store on each decision; a principal without a
user record is treated as a plain ``user``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from sqlalchemy.orm import Session
from storefront.domain.models import User, ROLE_USER, ROLE_MANAGER, ROLE_ADMIN
from storefront.core import get_logger
from .errors import Forbidden

logger = get_logger(__name__)


class Rule(str, Enum):
    AUTHENTICATED = "authenticated"
    SELF_OR_ADMIN = "self_or_admin"
    MANAGER_ONLY = "manager_only"
    ADMIN_ONLY = "admin_only"


# Configured role names mapped to the rule they enforce
ROLE_RULES = {
    ROLE_USER: Rule.AUTHENTICATED,
    ROLE_MANAGER: Rule.MANAGER_ONLY,
    ROLE_ADMIN: Rule.ADMIN_ONLY,
}


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True)
DENY = Decision(False, "forbidden")


class AccessPolicy:
    def __init__(self, db: Session):
        self.db = db

    def role_of(self, email: str) -> str:
        user = self.db.query(User).filter(User.email == email).first()
        return user.role if user else ROLE_USER

    def authorize(self, principal: str, rule: Rule, owner_email: Optional[str] = None) -> Decision:
        if rule == Rule.AUTHENTICATED:
            return ALLOW
        if rule == Rule.SELF_OR_ADMIN:
            if owner_email is not None and principal == owner_email:
                return ALLOW
            return ALLOW if self.role_of(principal) == ROLE_ADMIN else DENY
        if rule == Rule.MANAGER_ONLY:
            return ALLOW if self.role_of(principal) == ROLE_MANAGER else DENY
        if rule == Rule.ADMIN_ONLY:
            return ALLOW if self.role_of(principal) == ROLE_ADMIN else DENY
        raise ValueError(f"Unknown access rule: {rule}")

    def enforce(self, principal: str, rule: Rule, owner_email: Optional[str] = None) -> None:
        decision = self.authorize(principal, rule, owner_email)
        if not decision:
            logger.warning(f"Access denied: {rule.value} for {principal}")
            raise Forbidden()

    def enforce_role(self, principal: str, role: str) -> None:
        """Enforce a role named in configuration (``user``, ``manager`` or ``admin``)."""
        try:
            rule = ROLE_RULES[role]
        except KeyError:
            raise ValueError(f"Unknown role in access configuration: {role}")
        self.enforce(principal, rule)

    def can_view_order(self, principal: str, owner_email: str) -> bool:
        if principal == owner_email:
            return True
        return self.role_of(principal) in (ROLE_MANAGER, ROLE_ADMIN)
