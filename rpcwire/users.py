"""A user directory service working on the custom record types."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Optional

from .models import (
    Preferences,
    Role,
    Transaction,
    TransactionResult,
    User,
    UserMetadata,
)

logger = logging.getLogger(__name__)

_CREATED_AT = 1234567890
_STARTING_BALANCE = 1000.0


class UserService:
    """Keeps users in memory and answers queries about them.

    The list of users may be shared with the caller; every access goes
    through a lock, and callers receive copies.
    """

    def __init__(self, users: Optional[list[User]] = None) -> None:
        self.users: list[User] = users if users is not None else []
        self._lock = asyncio.Lock()

    async def create_user(self, username: str, email: str) -> User:
        """Register a new user with default role and preferences."""
        logger.info("Creating user: %s", username)
        async with self._lock:
            user = User(
                id=len(self.users) + 1,
                username=username,
                email=email,
                roles=[Role.USER],
                metadata=UserMetadata(
                    created_at=_CREATED_AT,
                    last_login=None,
                    preferences=Preferences(
                        theme="dark", language="en", notifications_enabled=True
                    ),
                ),
            )
            self.users.append(user)
            return copy.deepcopy(user)

    async def get_user(self, id: int) -> Optional[User]:
        """Return the user with the given id, or None."""
        logger.info("Fetching user %s", id)
        async with self._lock:
            found = next((user for user in self.users if user.id == id), None)
            return copy.deepcopy(found)

    async def update_preferences(self, user_id: int, prefs: Preferences) -> User:
        """Replace a user's preferences; raises LookupError for unknown ids."""
        logger.info("Updating preferences for user %s", user_id)
        async with self._lock:
            user = next((user for user in self.users if user.id == user_id), None)
            if user is None:
                raise LookupError(f"no user with id {user_id}")
            user.metadata.preferences = copy.deepcopy(prefs)
            return copy.deepcopy(user)

    async def process_transaction(self, tx: Transaction) -> TransactionResult:
        """Accept a transaction with a positive amount, reject the rest."""
        logger.info(
            "Processing transaction: %s -> %s (%s %s)",
            tx.from_,
            tx.to,
            tx.amount,
            tx.currency,
        )
        if tx.amount <= 0.0:
            return TransactionResult(
                success=False,
                transaction_id=None,
                balance=_STARTING_BALANCE,
                error="Invalid amount",
            )
        return TransactionResult(
            success=True,
            transaction_id=f"tx_{tx.timestamp}",
            balance=_STARTING_BALANCE - tx.amount,
            error=None,
        )

    async def list_users_by_role(self, role: Role) -> list[User]:
        """Return every user holding ``role``, in creation order."""
        logger.info("Listing users with role: %s", role.value)
        async with self._lock:
            return [copy.deepcopy(user) for user in self.users if role in user.roles]