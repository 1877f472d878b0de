from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from accounts_api.db.session import get_db
from accounts_api.schemas.user import (
    UpdateUserRoleRequest,
    UserListResponse,
    UserOut,
    UserResponse,
    UserUpdateRequest,
)
from accounts_api.security.deps import get_current_claims, require_admin
from accounts_api.security.jwt_tokens import TokenClaims
from accounts_api.services import users as users_service


router = APIRouter()

# largest value an INTEGER primary key holds on every supported backend
MAX_USER_ID = 2**31 - 1


@router.get("", response_model=UserListResponse)
def list_users(
    _: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> UserListResponse:
    users = [UserOut.model_validate(u) for u in users_service.list_users(db)]
    return UserListResponse(message="All users retrieved successfully", users=users, count=len(users))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    _: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = users_service.get_user(db, user_id)
    return UserResponse(message="User retrieved successfully", user=UserOut.model_validate(user))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    payload: UserUpdateRequest,
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    caller: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = users_service.update_user(db, caller, user_id, payload)
    return UserResponse(message="User updated successfully", user=UserOut.model_validate(user))


@router.patch("/{user_id}/role", response_model=UserResponse)
def update_user_role(
    payload: UpdateUserRoleRequest,
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    caller: TokenClaims = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = users_service.change_role(db, caller, user_id, payload.role)
    return UserResponse(message="User role updated successfully", user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=UserResponse)
def delete_user(
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    caller: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> UserResponse:
    deleted = users_service.delete_user(db, caller, user_id)
    return UserResponse(message="User deleted successfully", user=deleted)
