import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from accounts_api.db.session import get_db
from accounts_api.models.user import User
from accounts_api.schemas.auth import MessageResponse, SignInRequest, SignUpRequest
from accounts_api.schemas.user import UserOut, UserResponse
from accounts_api.security.cookies import clear_token_cookie, set_token_cookie
from accounts_api.security.jwt_tokens import TokenClaims, issue_token
from accounts_api.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _start_session(response: Response, user: User) -> None:
    token = issue_token(TokenClaims(id=user.id, email=user.email, role=user.role))
    set_token_cookie(response, token)


@router.post("/sign-up", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, response: Response, db: Session = Depends(get_db)) -> UserResponse:
    user = auth_service.register_user(db, payload)
    _start_session(response, user)

    logger.info("User registered: %s", user.email)
    return UserResponse(message="User registered successfully", user=UserOut.model_validate(user))


@router.post("/sign-in", response_model=UserResponse)
def sign_in(payload: SignInRequest, response: Response, db: Session = Depends(get_db)) -> UserResponse:
    user = auth_service.authenticate_user(db, payload.email, payload.password)
    _start_session(response, user)

    logger.info("User signed in: %s", user.email)
    return UserResponse(message="User signed in successfully", user=UserOut.model_validate(user))


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(response: Response) -> MessageResponse:
    clear_token_cookie(response)
    logger.info("User signed out")
    return MessageResponse(message="User signed out successfully")
