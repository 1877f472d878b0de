import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts_api.core.errors import DuplicateEmail, Forbidden, UserNotFound
from accounts_api.models.user import User
from accounts_api.repositories import users as users_repo
from accounts_api.schemas.user import Role, UserOut, UserUpdateRequest
from accounts_api.security.jwt_tokens import TokenClaims
from accounts_api.security.passwords import hash_password

logger = logging.getLogger(__name__)


def _is_admin(caller: TokenClaims) -> bool:
    return caller.role == "admin"


def _get_or_404(db: Session, user_id: int) -> User:
    user = users_repo.get_by_id(db, user_id)
    if user is None:
        raise UserNotFound()
    return user


def list_users(db: Session) -> List[User]:
    return users_repo.list_all(db)


def get_user(db: Session, user_id: int) -> User:
    return _get_or_404(db, user_id)


def update_user(db: Session, caller: TokenClaims, user_id: int, patch: UserUpdateRequest) -> User:
    """Apply a partial update on behalf of ``caller``.

    Users may only edit their own record and only admins may touch ``role``.
    Both checks happen before the target is looked up, so a non-admin gets
    403 for someone else's id whether or not it exists.
    """
    if not _is_admin(caller) and caller.id != user_id:
        raise Forbidden("You can only update your own profile")

    changes = patch.changes()
    if "role" in changes and not _is_admin(caller):
        raise Forbidden("Only admin users can change user roles")

    user = _get_or_404(db, user_id)

    if "email" in changes and changes["email"] != user.email:
        other = users_repo.get_by_email(db, changes["email"])
        if other is not None and other.id != user.id:
            raise DuplicateEmail()

    if "password" in changes:
        changes["password"] = hash_password(changes["password"])

    try:
        user = users_repo.update(db, user, changes)
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()

    logger.info("User %s updated by %s, fields: %s", user_id, caller.id, sorted(changes))
    return user


def change_role(db: Session, caller: TokenClaims, user_id: int, role: Role) -> User:
    user = _get_or_404(db, user_id)
    user = users_repo.update(db, user, {"role": role})
    logger.info("User %s role set to %s by admin %s", user_id, role, caller.id)
    return user


def delete_user(db: Session, caller: TokenClaims, user_id: int) -> UserOut:
    if not _is_admin(caller) and caller.id != user_id:
        raise Forbidden("You can only delete your own account")
    if _is_admin(caller) and caller.id == user_id:
        raise Forbidden("Admin users cannot delete their own account")

    user = _get_or_404(db, user_id)
    # snapshot the projection while the row still exists
    deleted = UserOut.model_validate(user)
    users_repo.delete(db, user)
    logger.info("User %s (%s) deleted by %s", user_id, deleted.email, caller.id)
    return deleted
