"""Registration and credential checks for user accounts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from middle_ground.core import security
from middle_ground.models.enums import Leaning
from middle_ground.models.user import User
from middle_ground.repositories.user_repo import UserRepository
from middle_ground.services.errors import (
    AuthenticationError,
    ConflictError,
    InvalidLeaning,
    MissingFields,
    UserNotFound,
)

logger = logging.getLogger(__name__)

__all__ = ["authenticate_user", "get_user", "register_user"]


def register_user(
    db: Session,
    *,
    username: str,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    pol_lean: str,
) -> User:
    """Persist a new user with a hashed password.

    Raises:
        MissingFields: If any field is empty.
        InvalidLeaning: If ``pol_lean`` is not one of the seven codes.
        UsernameInUse: If the username is taken.
        EmailInUse: If the email is taken.
    """
    if not all((username, first_name, last_name, email, password, pol_lean)):
        raise MissingFields(
            "Please provide all required fields: username, first_name, last_name, "
            "email, password, and political leaning"
        )
    try:
        leaning = Leaning(pol_lean)
    except ValueError as err:
        raise InvalidLeaning() from err

    try:
        user = UserRepository(db).create(
            username=username,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=security.hash_password(password),
            pol_lean=leaning,
        )
        db.commit()
    except ConflictError as err:
        db.rollback()
        logger.info("Registration rejected for %s: %s", username, err)
        raise
    except Exception:
        db.rollback()
        raise
    logger.info("User %s registered with leaning %s", username, leaning.value)
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Return the user whose credentials match.

    Raises:
        MissingFields: If either value is empty.
        AuthenticationError: If the user is unknown or the password is wrong.
    """
    if not username or not password:
        raise MissingFields("Please provide username and password")
    user = UserRepository(db).get_by_username(username)
    if user is None or not security.verify_password(user.password_hash, password):
        logger.warning("Failed login attempt for %s", username)
        raise AuthenticationError()
    return user


def get_user(db: Session, username: str) -> User:
    """Return the profile of ``username``.

    Raises:
        UserNotFound: If the user does not exist.
    """
    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise UserNotFound()
    return user
