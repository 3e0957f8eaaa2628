"""Routes handling registration, login and credential recovery."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response

from ...deps import AuthServiceDependency, CallerDependency
from ...schemas import (
    Envelope,
    LoginData,
    PasswordResetData,
    SecurityQuestionData,
    UserPublic,
    success,
)

router = APIRouter(prefix="/auth", tags=["auth"])

# Bodies are checked by the service so each form reports its own rejection message.
JsonBody = Annotated[Any, Body()]


@router.post("/register", response_model=Envelope[UserPublic], summary="Register a new user account")
async def register(service: AuthServiceDependency, payload: JsonBody = None) -> Envelope[UserPublic]:
    user = await service.register(payload)
    return success("User successfully registered!", UserPublic.from_document(user))


@router.post("/login", response_model=Envelope[LoginData], summary="Authenticate using username and password")
async def login(
    response: Response,
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[LoginData]:
    user, token = await service.login(payload)
    response.headers["Authorization"] = f"Bearer {token.token}"
    return success("Login Success!", LoginData(user=UserPublic.from_document(user), token=token.token))


@router.post(
    "/get-security-question",
    response_model=Envelope[SecurityQuestionData],
    summary="Fetch the security question of an account",
)
async def get_security_question(
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[SecurityQuestionData]:
    user = await service.get_security_question(payload)
    data = SecurityQuestionData(
        first_name=user.first_name,
        username=user.username,
        security_question=user.security_question,
    )
    return success("Security questions successfully fetched!", data)


@router.post(
    "/verify-security-answer",
    response_model=Envelope[str],
    summary="Check the answer to an account's security question",
)
async def verify_security_answer(service: AuthServiceDependency, payload: JsonBody = None) -> Envelope[str]:
    username = await service.verify_security_answer(payload)
    return success("Security question answered successfully!", username)


@router.patch(
    "/reset-password",
    response_model=Envelope[PasswordResetData],
    summary="Reset a forgotten password (requires securityAnswer)",
    description=(
        "Body: `username`, `securityAnswer`, `newPassword` and `confirmNewPassword`. "
        "The security answer is checked again here because nothing links this call "
        "to an earlier `verify-security-answer`. A body without it is rejected with "
        "\"Invalid reset password form data!\"."
    ),
)
async def reset_password(
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[PasswordResetData]:
    user = await service.reset_password(payload)
    return success("Password Reset Successful!", PasswordResetData(id=str(user.id), username=user.username))


@router.patch("/change-user-details", response_model=Envelope[UserPublic])
async def change_user_details(
    caller: CallerDependency,
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[UserPublic]:
    user = await service.change_user_details(payload, caller)
    return success("User Details Updated Successfully!", UserPublic.from_document(user))


@router.patch("/change-password", response_model=Envelope[UserPublic])
async def change_password(
    caller: CallerDependency,
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[UserPublic]:
    user = await service.change_password(payload, caller)
    return success("Password Changed Successful!", UserPublic.from_document(user))


@router.patch("/change-security-qa", response_model=Envelope[UserPublic])
async def change_security_qa(
    caller: CallerDependency,
    service: AuthServiceDependency,
    payload: JsonBody = None,
) -> Envelope[UserPublic]:
    user = await service.change_security_qa(payload, caller)
    return success("Security QA Updated Successfully!", UserPublic.from_document(user))
