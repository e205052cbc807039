"""Data access helpers for working with users."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from middle_ground.models.enums import Leaning
from middle_ground.models.user import User
from middle_ground.services.errors import EmailInUse, UsernameInUse

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user accounts."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        """Return a user by username."""
        return self.session.get(User, username)

    def get_leaning(self, username: str) -> Leaning | None:
        """Return the declared leaning of ``username`` without loading the row."""
        return self.session.scalar(select(User.pol_lean).where(User.username == username))

    def _email_taken(self, email: str) -> bool:
        return self.session.scalar(select(User.username).where(User.email == email)) is not None

    def create(
        self,
        *,
        username: str,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        pol_lean: Leaning,
    ) -> User:
        """Insert a new user.

        Raises:
            UsernameInUse: If the username is already registered.
            EmailInUse: If the email is already registered.
        """
        if self.get_by_username(username) is not None:
            raise UsernameInUse()
        if self._email_taken(email):
            raise EmailInUse()

        user = User(
            username=username,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=password_hash,
            pol_lean=pol_lean,
        )
        try:
            with self.session.begin_nested():
                self.session.add(user)
        except IntegrityError as err:
            # Lost a race with a concurrent registration.
            if self._email_taken(email):
                raise EmailInUse() from err
            raise UsernameInUse() from err
        return user
