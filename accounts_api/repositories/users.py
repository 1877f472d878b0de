from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from accounts_api.models.user import User


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def list_all(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def insert(db: Session, *, name: str, email: str, password_hash: str, role: str) -> User:
    user = User(name=name, email=email, password=password_hash, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(db: Session, user: User, values: Dict[str, Any]) -> User:
    for field, value in values.items():
        setattr(user, field, value)
    user.updated_at = func.now()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def delete(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()


def replace_password_hash(db: Session, user: User, password_hash: str) -> None:
    # not a profile change, so updated_at is left alone
    user.password = password_hash
    db.add(user)
    db.commit()
