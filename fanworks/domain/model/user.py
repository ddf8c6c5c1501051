"""User profile as seen by the comment system.

Accounts are managed by the identity provider; comments only need the
handle (for display names) and the role (for moderation rights).
"""

from datetime import datetime

from pydantic import Field

from fanworks.domain.model.common import DomainModel, utcnow
from fanworks.domain.value import Handle, UserId, UserRole


class User(DomainModel):
    """Registered user."""

    id: UserId
    handle: Handle
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow)
