"""
Accounts: registration, login and profile management.
"""
import logging

from nuber_api.core.results import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    service_result,
)
from nuber_api.core.security import create_access_token, hash_password, verify_password
from nuber_api.db.storage import Storage
from nuber_api.models.user import User
from nuber_api.schemas.auth import AccountCreate, ProfileUpdate, UserLogin

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, storage: Storage):
        self.storage = storage

    @service_result("Could not create account")
    def create_account(self, data: AccountCreate) -> int:
        with self.storage.transaction():
            if self.storage.users.find_one(User.email == data.email):
                raise ConflictError("There is a user with that email already")

            user = self.storage.users.save(
                self.storage.users.create(
                    email=data.email,
                    hashed_password=hash_password(data.password),
                    role=data.role,
                )
            )
            user_id = user.id

        logger.info(f"Created {data.role.value} account {user_id}")
        return user_id

    @service_result("Can't log user in.")
    def login(self, data: UserLogin) -> str:
        """Check credentials and return a signed access token."""
        user = self.storage.users.find_one(User.email == data.email)
        if user is None:
            raise NotFoundError("User not found")
        if not verify_password(data.password, user.hashed_password):
            raise ForbiddenError("Wrong password")
        return create_access_token(subject=user.id)

    @service_result("User not found.")
    def find_by_id(self, user_id: int) -> User:
        user = self.storage.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    @service_result("Could not update profile")
    def edit_profile(self, user_id: int, data: ProfileUpdate) -> None:
        """
        Update email and/or password.

        A new email address marks the account unverified again.
        """
        with self.storage.transaction():
            user = self.storage.users.find_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found.")

            if data.email and data.email != user.email:
                if self.storage.users.find_one(User.email == data.email):
                    raise ConflictError("There is a user with that email already")
                user.email = data.email
                user.verified = False

            if data.password:
                user.hashed_password = hash_password(data.password)

        logger.info(f"User {user_id} updated their profile")
