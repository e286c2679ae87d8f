"""
Resolves a session user to the permission evaluator for their group.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..domain.permission_evaluator import PermissionEvaluator
from ..domain.permissions import PermissionMatrix, SystemUser, UserGroup

logger = logging.getLogger(__name__)


class UserDirectoryProtocol(Protocol):
    """Protocol describing the user/group lookups needed by the service."""

    def get_user(self, user_id: str) -> Optional[SystemUser]:
        """Return the user with ``user_id`` or None."""

    def get_user_group(self, group_id: str) -> Optional[UserGroup]:
        """Return the group with ``group_id`` or None."""


class AccessControlService:
    """
    Looks up a user's group and wraps its matrix in a ``PermissionEvaluator``.

    Members of ``admin_group_id`` get full access regardless of the matrix
    stored on the group.
    """

    def __init__(
        self,
        directory: UserDirectoryProtocol,
        admin_group_id: Optional[str] = "admin-group",
    ) -> None:
        self._directory = directory
        self._admin_group_id = admin_group_id

    def resolve_matrix(self, user_id: Optional[str]) -> Optional[PermissionMatrix]:
        """
        Find the effective permission matrix for a session user.

        Returns None when there is no session user, the user is unknown or
        their group no longer exists.
        """
        if not user_id:
            return None

        user = self._directory.get_user(user_id)
        if user is None:
            logger.debug("No user %s in directory", user_id)
            return None

        if self._admin_group_id and user.user_group_id == self._admin_group_id:
            return PermissionMatrix.full_access()

        group = self._directory.get_user_group(user.user_group_id)
        if group is None:
            logger.warning(
                "User %s references missing group %s", user.username, user.user_group_id
            )
            return None

        return group.permissions

    def evaluator_for(self, user_id: Optional[str]) -> PermissionEvaluator:
        return PermissionEvaluator(self.resolve_matrix(user_id))
