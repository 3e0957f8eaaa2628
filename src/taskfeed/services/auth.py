"""Account registration, login and credential recovery."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status

from ..core.config import Settings
from ..core.guard import ensure_same_identity
from ..core.security import (
    CallerIdentity,
    GeneratedToken,
    create_access_token,
    hash_secret,
    verify_secret,
)
from ..errors import InvalidCredentialsError, NotFoundError, PreconditionFailedError
from ..models import User
from ..repositories import UserRepository
from ..repositories.users import DUPLICATE_ACCOUNT_MESSAGE
from ..schemas.forms import (
    CHANGE_PASSWORD_FORM,
    CHANGE_SECURITY_QA_FORM,
    CHANGE_USER_DETAILS_FORM,
    FORGOT_PASSWORD_FORM,
    LOGIN_FORM,
    REGISTER_FORM,
    RESET_PASSWORD_FORM,
    SECURITY_ANSWER_FORM,
    ChangePasswordForm,
    ChangeSecurityQAForm,
    ChangeUserDetailsForm,
    ForgotPasswordForm,
    LoginForm,
    RegisterForm,
    ResetPasswordForm,
    SecurityAnswerForm,
)
from .base import PipelineService

logger = logging.getLogger(__name__)

WRONG_PASSWORD_MESSAGE = "You provided the wrong password!"


class AuthService(PipelineService):
    """Business logic for credentials and account recovery."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._users = UserRepository()

    async def register(self, payload: Any) -> User:
        """Create an account after checking username and email are free."""

        form: RegisterForm = self.validate(REGISTER_FORM, payload)
        existing = await self._users.get_by_username_or_email(form.username, form.email)
        if existing is not None:
            raise PreconditionFailedError(DUPLICATE_ACCOUNT_MESSAGE)

        user = User(
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            username=form.username,
            password_hash=hash_secret(form.password),
            security_question=form.security_question,
            security_answer_hash=hash_secret(form.security_answer),
        )
        await self._users.insert(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, payload: Any) -> tuple[User, GeneratedToken]:
        """Verify credentials and issue a bearer token."""

        form: LoginForm = self.validate(LOGIN_FORM, payload)
        user = await self._users.get_by_username(form.username)
        # unknown usernames and wrong passwords are indistinguishable
        if user is None or not verify_secret(form.password, user.password_hash):
            raise InvalidCredentialsError("User not found")

        token = create_access_token(subject=str(user.id), settings=self._settings)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return user, token

    async def get_security_question(self, payload: Any) -> User:
        form: ForgotPasswordForm = self.validate(FORGOT_PASSWORD_FORM, payload)
        user = await self._users.get_by_username_or_email(form.username_or_email)
        if user is None:
            raise NotFoundError("User does not exist!", status_code=status.HTTP_400_BAD_REQUEST)
        return user

    async def verify_security_answer(self, payload: Any) -> str:
        """Return the username once the security answer checks out."""

        form: SecurityAnswerForm = self.validate(SECURITY_ANSWER_FORM, payload)
        user = await self._users.get_by_username(form.username)
        if user is None or not verify_secret(form.security_answer, user.security_answer_hash):
            raise InvalidCredentialsError("Invalid auth!")
        return user.username

    async def reset_password(self, payload: Any) -> User:
        """Replace a forgotten password, re-checking the security answer first."""

        form: ResetPasswordForm = self.validate(RESET_PASSWORD_FORM, payload)
        user = await self._users.get_by_username(form.username)
        if user is None:
            raise NotFoundError("Bad request!")
        if not verify_secret(form.security_answer, user.security_answer_hash):
            raise InvalidCredentialsError("Invalid auth!")
        if verify_secret(form.new_password, user.password_hash):
            raise PreconditionFailedError("New password cannot be the same as the old password!")

        user.password_hash = hash_secret(form.new_password)
        await self._users.save(user)
        logger.info("Password reset", extra={"user_id": str(user.id)})
        return user

    async def _load_verified_user(self, user_id: str, password: str) -> User:
        document_id = self.parse_id(user_id, "Invalid userId!")
        user = await self._users.get_or_raise(document_id, "User not found!")
        if not verify_secret(password, user.password_hash):
            raise InvalidCredentialsError(WRONG_PASSWORD_MESSAGE)
        return user

    async def change_user_details(self, payload: Any, caller: CallerIdentity | None) -> User:
        form: ChangeUserDetailsForm = self.validate(CHANGE_USER_DETAILS_FORM, payload)
        ensure_same_identity(caller, form.user_id)
        user = await self._load_verified_user(form.user_id, form.password)

        user.first_name = form.first_name
        user.last_name = form.last_name
        await self._users.save(user)
        return user

    async def change_password(self, payload: Any, caller: CallerIdentity | None) -> User:
        form: ChangePasswordForm = self.validate(CHANGE_PASSWORD_FORM, payload)
        ensure_same_identity(caller, form.user_id)
        user = await self._load_verified_user(form.user_id, form.old_password)
        if verify_secret(form.new_password, user.password_hash):
            raise PreconditionFailedError("New password cannot match your old password!")

        user.password_hash = hash_secret(form.new_password)
        await self._users.save(user)
        logger.info("Password changed", extra={"user_id": str(user.id)})
        return user

    async def change_security_qa(self, payload: Any, caller: CallerIdentity | None) -> User:
        form: ChangeSecurityQAForm = self.validate(CHANGE_SECURITY_QA_FORM, payload)
        ensure_same_identity(caller, form.user_id)
        user = await self._load_verified_user(form.user_id, form.password)
        if verify_secret(form.new_security_q_answer, user.security_answer_hash):
            raise PreconditionFailedError("New security answer cannot match your old security answer!")

        user.security_question = form.new_security_question
        user.security_answer_hash = hash_secret(form.new_security_q_answer)
        await self._users.save(user)
        return user


__all__ = ["AuthService", "WRONG_PASSWORD_MESSAGE"]
