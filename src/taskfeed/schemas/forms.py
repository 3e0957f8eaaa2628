"""Request payload shapes.

Each model is paired with a ``NamedSchema`` carrying the message returned
when a payload does not fit. Payload keys are camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.validation import NamedSchema
from ..models import PostVisibility, SubtaskProgress

# bcrypt ignores input past 72 bytes
_SECRET_MAX_LENGTH = 72


class FormModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class RegisterForm(FormModel):
    first_name: str = Field(min_length=1, max_length=64)
    last_name: str = Field(min_length=1, max_length=64)
    email: EmailStr
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    password: str = Field(min_length=8, max_length=_SECRET_MAX_LENGTH)
    security_question: str = Field(min_length=1, max_length=255)
    security_answer: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginForm(FormModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)


class ForgotPasswordForm(FormModel):
    username_or_email: str = Field(min_length=1)


class SecurityAnswerForm(FormModel):
    username: str = Field(min_length=1)
    security_answer: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)


class ResetPasswordForm(FormModel):
    username: str = Field(min_length=1)
    security_answer: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)
    new_password: str = Field(min_length=8, max_length=_SECRET_MAX_LENGTH)
    confirm_new_password: str = Field(min_length=8, max_length=_SECRET_MAX_LENGTH)

    @model_validator(mode="after")
    def _passwords_match(self) -> "ResetPasswordForm":
        if self.new_password != self.confirm_new_password:
            raise ValueError("Passwords do not match.")
        return self


class ChangeUserDetailsForm(FormModel):
    user_id: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)
    first_name: str = Field(min_length=1, max_length=64)
    last_name: str = Field(min_length=1, max_length=64)


class ChangePasswordForm(FormModel):
    user_id: str = Field(min_length=1)
    old_password: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)
    new_password: str = Field(min_length=8, max_length=_SECRET_MAX_LENGTH)
    new_confirm_password: str = Field(min_length=8, max_length=_SECRET_MAX_LENGTH)

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordForm":
        if self.new_password != self.new_confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class ChangeSecurityQAForm(FormModel):
    user_id: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)
    new_security_question: str = Field(min_length=1, max_length=255)
    new_security_q_answer: str = Field(min_length=1, max_length=_SECRET_MAX_LENGTH)


class CreatePostForm(FormModel):
    title: str = Field(min_length=1, max_length=120)
    color: str = Field(pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$")
    category: str = Field(min_length=1, max_length=40)
    visibility: PostVisibility = PostVisibility.PUBLIC
    due_date: datetime | None = None


class CreateTaskForm(FormModel):
    title: str = Field(min_length=1, max_length=120)


class CreateSubtaskForm(FormModel):
    title: str = Field(min_length=1, max_length=120)
    progress: SubtaskProgress = SubtaskProgress.NOT_STARTED
    priority: int | None = Field(default=None, ge=1, le=10)
    due_date: datetime | None = None


class SubtaskProgressForm(FormModel):
    progress: SubtaskProgress


class CreateCommentForm(FormModel):
    content: str = Field(min_length=1, max_length=1000)


REGISTER_FORM = NamedSchema("register", RegisterForm, "Invalid register form data!")
LOGIN_FORM = NamedSchema("login", LoginForm, "Invalid login form data!")
FORGOT_PASSWORD_FORM = NamedSchema(
    "forgot-password",
    ForgotPasswordForm,
    "Invalid security question form data!",
)
SECURITY_ANSWER_FORM = NamedSchema(
    "security-answer",
    SecurityAnswerForm,
    "Invalid security answer form data!",
)
RESET_PASSWORD_FORM = NamedSchema(
    "reset-password",
    ResetPasswordForm,
    "Invalid reset password form data!",
)
CHANGE_USER_DETAILS_FORM = NamedSchema(
    "change-user-details",
    ChangeUserDetailsForm,
    "First Name, Last Name and Password properties are required!",
)
CHANGE_PASSWORD_FORM = NamedSchema(
    "change-password",
    ChangePasswordForm,
    "Old Password, New Password, and Confirm Password properties are required!",
)
CHANGE_SECURITY_QA_FORM = NamedSchema(
    "change-security-qa",
    ChangeSecurityQAForm,
    "New Security Question, New Security Question Answer, and Password properties are required!",
)
CREATE_POST_FORM = NamedSchema("create-post", CreatePostForm, "Invalid post form data!")
CREATE_TASK_FORM = NamedSchema("create-task", CreateTaskForm, "Invalid task form data!")
CREATE_SUBTASK_FORM = NamedSchema("create-subtask", CreateSubtaskForm, "Invalid subtask form data!")
SUBTASK_PROGRESS_FORM = NamedSchema(
    "subtask-progress",
    SubtaskProgressForm,
    "Invalid subtask progress data!",
)
CREATE_COMMENT_FORM = NamedSchema("create-comment", CreateCommentForm, "Invalid comment form data!")


__all__ = [
    "CHANGE_PASSWORD_FORM",
    "CHANGE_SECURITY_QA_FORM",
    "CHANGE_USER_DETAILS_FORM",
    "CREATE_COMMENT_FORM",
    "CREATE_POST_FORM",
    "CREATE_SUBTASK_FORM",
    "CREATE_TASK_FORM",
    "ChangePasswordForm",
    "ChangeSecurityQAForm",
    "ChangeUserDetailsForm",
    "CreateCommentForm",
    "CreatePostForm",
    "CreateSubtaskForm",
    "CreateTaskForm",
    "FORGOT_PASSWORD_FORM",
    "ForgotPasswordForm",
    "LOGIN_FORM",
    "LoginForm",
    "REGISTER_FORM",
    "RESET_PASSWORD_FORM",
    "RegisterForm",
    "ResetPasswordForm",
    "SECURITY_ANSWER_FORM",
    "SUBTASK_PROGRESS_FORM",
    "SecurityAnswerForm",
    "SubtaskProgressForm",
]
