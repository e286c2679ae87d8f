"""
Permission checks against a group's permission matrix.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .exceptions import PermissionDeniedError
from .permissions import (
    ALWAYS_VISIBLE_SECTIONS,
    MENU_SECTIONS,
    PermissionAction,
    PermissionKey,
    PermissionMatrix,
)

KeyLike = Union[PermissionKey, str]
ActionLike = Union[PermissionAction, str]


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a guarded permission check."""
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


class PermissionEvaluator:
    """
    Answers whether a subject may act on a resource.

    ``matrix`` is the subject's group matrix, or None when no matrix could
    be resolved (no session user, unknown group). Without a matrix every
    check fails. EDIT implies VIEW; NONE is never a grantable request.
    """

    def __init__(self, matrix: Optional[PermissionMatrix] = None):
        self.matrix = matrix

    def has_permission(self, key: KeyLike, required_action: ActionLike) -> bool:
        resource = PermissionKey.coerce(key)
        required = PermissionAction.coerce(required_action)

        if self.matrix is None:
            return False

        level = self.matrix.level(resource)

        if required is PermissionAction.VIEW:
            return level in (PermissionAction.VIEW, PermissionAction.EDIT)

        if required is PermissionAction.EDIT:
            return level is PermissionAction.EDIT

        return False

    def can_view(self, key: KeyLike) -> bool:
        return self.has_permission(key, PermissionAction.VIEW)

    def can_edit(self, key: KeyLike) -> bool:
        return self.has_permission(key, PermissionAction.EDIT)

    def menu_permissions(self) -> Dict[str, bool]:
        """Visibility of each UI section for this subject."""
        visibility = {section: True for section in ALWAYS_VISIBLE_SECTIONS}
        for section, key in MENU_SECTIONS.items():
            visibility[section] = self.can_view(key)
        return visibility

    def check(self, key: KeyLike, required_action: ActionLike = PermissionAction.VIEW) -> AccessDecision:
        """
        Guard form of ``has_permission`` that explains a denial.

        Returns:
            AccessDecision with ``allowed`` and, when denied, a reason
        """
        resource = PermissionKey.coerce(key)
        required = PermissionAction.coerce(required_action)

        if self.has_permission(resource, required):
            return AccessDecision(allowed=True)

        if self.matrix is None:
            return AccessDecision(False, "Access denied - No user group")

        if required is PermissionAction.NONE:
            return AccessDecision(False, "Access denied - NONE is not a requestable action")

        if self.matrix.level(resource) is PermissionAction.NONE:
            return AccessDecision(False, f"Access denied - No permission for {resource.value}")

        return AccessDecision(False, f"Access denied - Need EDIT permission for {resource.value}")

    def require(self, key: KeyLike, required_action: ActionLike = PermissionAction.VIEW) -> None:
        """
        Raise if the subject lacks ``required_action`` on ``key``.

        Raises:
            PermissionDeniedError: With the reason from ``check``
        """
        decision = self.check(key, required_action)
        if not decision.allowed:
            raise PermissionDeniedError(
                key=PermissionKey.coerce(key).value,
                action=PermissionAction.coerce(required_action).value,
                reason=decision.reason,
            )

    @property
    def permissions(self) -> Dict[str, str]:
        if self.matrix is None:
            return {}
        return self.matrix.to_dict()
