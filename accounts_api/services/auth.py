import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from accounts_api.core.errors import DuplicateEmail, InvalidCredentials, UserNotFound
from accounts_api.models.user import User
from accounts_api.repositories import users as users_repo
from accounts_api.schemas.auth import SignUpRequest
from accounts_api.security.passwords import hash_password, verify_and_rehash

logger = logging.getLogger(__name__)


def register_user(db: Session, payload: SignUpRequest) -> User:
    if users_repo.get_by_email(db, payload.email) is not None:
        raise DuplicateEmail()

    try:
        user = users_repo.insert(
            db,
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role,
        )
    except IntegrityError:
        # lost a race against a concurrent sign-up for the same email
        db.rollback()
        raise DuplicateEmail()

    logger.info("User %s created with id %s", user.email, user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = users_repo.get_by_email(db, email)
    if user is None:
        logger.warning("Sign-in attempt for unknown email %s", email)
        raise UserNotFound("No user is registered with this email")

    matches, new_hash = verify_and_rehash(password, user.password)
    if not matches:
        logger.warning("Invalid password for user %s", user.id)
        raise InvalidCredentials()
    if new_hash is not None:
        users_repo.replace_password_hash(db, user, new_hash)
        logger.info("Upgraded password hash for user %s", user.id)

    logger.info("User %s authenticated", user.email)
    return user
