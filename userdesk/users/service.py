import logging
from typing import List

from userdesk.exceptions import NotFoundException
from userdesk.users.dto import CreateUserRequest, UpdateUserRequest
from userdesk.users.models import User
from userdesk.users.repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Business operations on user accounts.

    Each operation logs what it is about to do and how it ended. Store
    failures are logged with their traceback and re-raised unchanged;
    NotFoundException is logged as a warning where it is raised.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def create(self, data: CreateUserRequest) -> User:
        """Persist a new user. The returned record includes the password."""
        logger.info(f"Creating new user with email: {data.email}")
        try:
            user = await self.user_repo.create(data.to_dict())
            logger.info(f"User created successfully with ID: {user.id}")
            return user
        except Exception as e:
            logger.error(f"Failed to create user: {e}", exc_info=True)
            raise

    async def find_all(self) -> List[User]:
        logger.info("Fetching all users")
        try:
            users = await self.user_repo.find_all()
            logger.info(f"Retrieved {len(users)} users")
            return users
        except Exception as e:
            logger.error(f"Failed to fetch users: {e}", exc_info=True)
            raise

    async def find_one(self, user_id: str) -> User:
        logger.info(f"Fetching user with ID: {user_id}")
        try:
            user = await self.user_repo.find_by_id(user_id)
        except Exception as e:
            logger.error(f"Failed to fetch user: {e}", exc_info=True)
            raise

        if user is None:
            logger.warning(f"User with ID: {user_id} not found")
            raise NotFoundException(f"User with ID {user_id} not found")

        logger.info(f"Retrieved user with ID: {user_id}")
        return user

    async def update(self, user_id: str, data: UpdateUserRequest) -> User:
        """Apply only the provided fields, then return the re-read record."""
        logger.info(f"Updating user with ID: {user_id}")
        existing = await self.find_one(user_id)

        changes = data.changes()
        if not changes:
            logger.info(f"No changes supplied for user with ID: {user_id}")
            return existing

        try:
            await self.user_repo.update(user_id, changes)
            updated = await self.user_repo.find_by_id(user_id)
        except Exception as e:
            logger.error(f"Failed to update user: {e}", exc_info=True)
            raise

        if updated is None:
            logger.warning(f"User with ID: {user_id} disappeared during update")
            raise NotFoundException(f"User with ID {user_id} not found")

        logger.info(f"User with ID: {user_id} updated successfully")
        return updated

    async def remove(self, user_id: str) -> None:
        logger.info(f"Removing user with ID: {user_id}")
        await self.find_one(user_id)

        try:
            await self.user_repo.delete_by_id(user_id)
        except Exception as e:
            logger.error(f"Failed to remove user: {e}", exc_info=True)
            raise

        logger.info(f"User with ID: {user_id} removed successfully")

    async def find_by_email(self, email: str) -> User:
        logger.info(f"Fetching user with email: {email}")
        try:
            user = await self.user_repo.find_by_email(email)
        except Exception as e:
            logger.error(f"Failed to fetch user by email: {e}", exc_info=True)
            raise

        if user is None:
            logger.warning(f"User with email: {email} not found")
            raise NotFoundException(f"User with email {email} not found")

        logger.info(f"Retrieved user with email: {email}")
        return user
