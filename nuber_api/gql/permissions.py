"""
Role guards for GraphQL fields.
"""
from typing import Any, FrozenSet

from strawberry.permission import BasePermission
from strawberry.types import Info

from nuber_api.models.user import UserRole


class IsAuthenticated(BasePermission):
    """Any logged-in user; subclasses narrow the accepted roles."""
    message = "Forbidden resource"
    roles: FrozenSet[UserRole] = frozenset()

    def has_permission(self, source: Any, info: Info, **kwargs) -> bool:
        user = info.context.user
        if user is None:
            return False
        return not self.roles or user.role in self.roles


class IsClient(IsAuthenticated):
    roles = frozenset({UserRole.CLIENT})


class IsOwner(IsAuthenticated):
    roles = frozenset({UserRole.OWNER})


class IsDelivery(IsAuthenticated):
    roles = frozenset({UserRole.DELIVERY})
