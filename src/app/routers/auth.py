from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from src.app.deps import get_auth_service
from src.app.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    RepositoryError,
)
from src.app.schemas.auth import LoginRequest, LoginResponse, SignupRequest
from src.app.schemas.sauces import MessageResponse
from src.app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    # bcrypt blocks for the whole hash; keep it off the event loop
    try:
        await run_in_threadpool(service.signup, payload.email, payload.password)
    except EmailAlreadyRegisteredError:
        raise HTTPException(status_code=409, detail="Email already registered")
    except RepositoryError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return MessageResponse(message="User created !")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    try:
        user_id, token = await run_in_threadpool(service.login, payload.email, payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc))
    except RepositoryError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return LoginResponse(userId=user_id, token=token)
