"""Authentication and user profile access backed by Supabase."""

from typing import Callable

from ..config.constants import MSG_NOT_SIGNED_IN
from ..models.account import ProfileUpdate, UserProfile, UserSession
from ..utils.exceptions import AuthError, PersistenceError
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROFILE_TABLE = "user_profile"


class AuthService:
    """Signs users in and out and keeps the signed-in user's profile."""

    def __init__(self, client):
        """
        Args:
            client: Supabase client (``supabase.create_client``)
        """
        self.client = client
        self._session: UserSession | None = None
        self._profile: UserProfile | None = None
        self._sign_out_listeners: list[Callable[[], None]] = []

    @property
    def current_session(self) -> UserSession | None:
        return self._session

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    def add_sign_out_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every sign-out."""
        self._sign_out_listeners.append(listener)

    def sign_in(self, email: str, password: str) -> UserSession:
        """
        Sign in with email and password, then load the user's profile.

        Args:
            email: Account email
            password: Account password

        Returns:
            The new session

        Raises:
            AuthError: If the provider rejects the credentials
        """
        logger.info(f"Signing in {email.strip()}")

        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email.strip(), "password": password}
            )
        except Exception as e:
            error_msg = getattr(e, "message", None) or str(e)
            logger.error(f"Sign-in failed for {email.strip()}: {error_msg}")
            raise AuthError(error_msg) from e

        if response.user is None:
            raise AuthError("Identifiants invalides.")

        self._session = UserSession(
            user_id=response.user.id,
            email=response.user.email,
            access_token=response.session.access_token if response.session else None,
        )
        self._profile = self._fetch_profile(self._session.user_id)
        return self._session

    def sign_out(self) -> None:
        """Sign out and notify listeners, even if the provider call fails."""
        logger.info("Signing out")
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Provider sign-out failed, clearing local session anyway: {e}")
        finally:
            self._session = None
            self._profile = None
            for listener in self._sign_out_listeners:
                listener()

    def update_profile(self, update: ProfileUpdate) -> UserProfile:
        """
        Write the changed profile fields.

        Args:
            update: Fields to change; unset fields are left untouched

        Returns:
            The updated profile

        Raises:
            AuthError: If nobody is signed in
            PersistenceError: If the update fails
        """
        if self._session is None:
            raise AuthError(MSG_NOT_SIGNED_IN)
        if update.is_empty:
            logger.info("Profile update has no changes")
            return self._profile

        row = update.to_row()
        logger.info(f"Updating profile fields {sorted(row)} for user {self._session.user_id}")

        try:
            response = (
                self.client.table(PROFILE_TABLE)
                .update(row)
                .eq("user_id", self._session.user_id)
                .execute()
            )
        except Exception as e:
            error_msg = f"Failed to update profile: {e}"
            logger.error(error_msg)
            raise PersistenceError(error_msg) from e

        rows = response.data or []
        if not rows:
            raise PersistenceError("Profile row not found")

        self._profile = UserProfile.model_validate(rows[0])
        return self._profile

    def _fetch_profile(self, user_id: str) -> UserProfile | None:
        """Load the profile row; a missing row or a read failure gives None."""
        try:
            response = (
                self.client.table(PROFILE_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching user profile: {e}")
            return None

        rows = response.data or []
        if not rows:
            logger.warning(f"No profile found for user {user_id}")
            return None
        return UserProfile.model_validate(rows[0])
