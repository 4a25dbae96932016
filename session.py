import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from errors import NotAuthenticatedError
from persistent_storage import get_auth_session, sign_in_with_password

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """The signed-in user and the client their requests go through.

    Every component takes one of these instead of looking the user up itself.
    """
    model_config = ConfigDict(frozen=True)

    client: Any
    user_id: str
    email: Optional[str] = None


def _session_from_auth(supabase, auth_session):
    user = getattr(auth_session, 'user', None) if auth_session else None
    if user is None or not getattr(user, 'id', None):
        raise NotAuthenticatedError()
    return Session(client=supabase, user_id=str(user.id), email=getattr(user, 'email', None))


def get_current_session(supabase):
    return _session_from_auth(supabase, get_auth_session(supabase))


def sign_in(supabase, email, password):
    response = sign_in_with_password(supabase, email, password)
    session = _session_from_auth(supabase, getattr(response, 'session', None))
    logger.info(f"Signed in as {session.user_id}")
    return session
