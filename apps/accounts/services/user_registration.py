"""User registration service."""

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import DuplicateUserError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(
    *,
    name: str,
    password: str,
    email: Optional[str] = None
) -> User:
    """
    Register a new user with a zero cash balance.

    Args:
        name: Unique user name (login identity)
        password: User's password (will be hashed)
        email: Optional email address

    Returns:
        Created User instance

    Raises:
        DuplicateUserError: If the name is already taken
    """
    if User.objects.filter(name=name).exists():
        raise DuplicateUserError(f"User name '{name}' is already taken")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                name=name,
                password=password,
                email=email,
            )
    except IntegrityError:
        # Lost a race against a concurrent registration
        raise DuplicateUserError(f"User name '{name}' is already taken")

    logger.info("Registered user %s (id=%s)", user.name, user.pk)
    return user
