import logging

from fastapi import APIRouter, Depends, Response, status

from app.core.config import settings
from app.core.dependencies import get_current_user, get_user_repository
from app.core.exceptions import AuthorizationError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.auth_service import auth_service
from app.schemas.auth import UserLogin, UserRegister, AuthResponse
from app.schemas.base import SuccessResponse
from app.schemas.user import UserBrief, UserRead

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )


def build_auth_response(response: Response, user: User) -> AuthResponse:
    access_token = auth_service.create_user_token(user)
    set_auth_cookie(response, access_token)
    return AuthResponse(
        user=UserBrief.model_validate(user),
        access_token=access_token,
        token_type="bearer"
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
        user: UserRegister,
        response: Response,
        repo: UserRepository = Depends(get_user_repository),
):
    """Регистрация нового пользователя и выдача токена (тело + cookie)"""
    new_user = await auth_service.register_user(repo, user)
    return build_auth_response(response, new_user)


@router.post("/login", response_model=AuthResponse)
async def login(
        user: UserLogin,
        response: Response,
        repo: UserRepository = Depends(get_user_repository),
):
    """Аутентификация пользователя и выдача JWT токена"""
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise AuthorizationError("Invalid credentials")

    logger.info("User %s logged in", authenticated_user.id)
    return build_auth_response(response, authenticated_user)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return SuccessResponse()


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)
