from typing import Callable, List, Optional

from pydantic import BaseModel

from truthlens.config import logger


class AuthSession(BaseModel):
    access_token: str
    user_id: str
    email: Optional[str] = None


SessionListener = Callable[[Optional[AuthSession]], None]


class AuthState:
    """Observable holder for the current session.

    Sign-in and sign-out themselves happen elsewhere; whoever performs them
    reports the outcome here and every subscriber is told, in subscription
    order.
    """

    def __init__(self, session: Optional[AuthSession] = None):
        self._session = session
        self._listeners: List[SessionListener] = []

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, session: AuthSession) -> None:
        logger.info("Session started for user %s", session.user_id)
        self._set(session)

    def sign_out(self) -> None:
        logger.info("Session ended")
        self._set(None)

    def _set(self, session: Optional[AuthSession]) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(session)
