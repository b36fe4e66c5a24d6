"""Maps a provider profile to a local account and logs it in."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from config import ALLOW_REGISTRATION
from database.crud import UserCRUD
from database.models import User

from .jwt import create_token_pair

logger = logging.getLogger(__name__)


class AccountError(Exception):
    """The profile is valid but the account may not log in."""


class AccountBlockedError(AccountError):
    def __init__(self):
        super().__init__("Your account is blocked, please contact the administrator")


class RegistrationDisabledError(AccountError):
    def __init__(self):
        super().__init__(
            "New accounts cannot be created with social login, please contact the administrator"
        )


class IdentityConflictError(AccountError):
    def __init__(self):
        super().__init__(
            "This email address belongs to an account linked to another login, "
            "please contact the administrator"
        )


@dataclass
class LoginResult:
    """Outcome of a successful social login."""

    user: User
    created: bool
    access_token: str
    refresh_token: str


class SocialAuthUserManager:
    """Logs in or registers users coming back from a social provider."""

    def __init__(self, db: Session, provider: str, allow_registration: bool = ALLOW_REGISTRATION):
        self.db = db
        self.provider = provider
        self.allow_registration = allow_registration

    def authenticate_user(
        self,
        email: Optional[str],
        name: Optional[str],
        provider_user_id: str,
        picture_url: Optional[str] = None,
    ) -> LoginResult:
        """
        Login the account matching the profile, creating it if needed.

        Lookup order is the linked provider identity, then the email address.

        Raises:
            AccountBlockedError: If the matched account is blocked
            RegistrationDisabledError: If no account matches and registration is off
            IdentityConflictError: If the email belongs to an account linked to another identity
        """
        created = False
        user = UserCRUD.get_user_by_oauth(self.db, self.provider, provider_user_id)

        if user is None:
            user = UserCRUD.get_user_by_email(self.db, email)
            if user is not None:
                self._check_active(user)
                if user.oauth_id is not None:
                    logger.warning(
                        f"Refused to relink user {user.id}: already linked to {user.oauth_provider}"
                    )
                    raise IdentityConflictError()
                user = UserCRUD.link_oauth(self.db, user.id, self.provider, provider_user_id)
                logger.info(f"Linked {self.provider} identity to existing user {user.id}")

        if user is None:
            if not self.allow_registration:
                logger.warning(f"Refused {self.provider} registration: registration disabled")
                raise RegistrationDisabledError()
            user = UserCRUD.create_user(
                self.db,
                email=email,
                name=name,
                picture_url=picture_url,
                oauth_provider=self.provider,
                oauth_id=provider_user_id,
            )
            created = True
            logger.info(f"Registered user {user.id} via {self.provider}")

        self._check_active(user)

        if not created:
            user = UserCRUD.update_profile(self.db, user.id, name=name, picture_url=picture_url)

        user = UserCRUD.touch_login(self.db, user.id)
        access_token, refresh_token = create_token_pair(user.id, self.provider)
        logger.info(f"User {user.id} logged in via {self.provider}")

        return LoginResult(
            user=user,
            created=created,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    def _check_active(self, user: User) -> None:
        if user.is_blocked:
            logger.warning(f"Blocked user {user.id} tried to log in via {self.provider}")
            raise AccountBlockedError()
