from typing import Optional

from jose import JWTError, jwt

from orgauth.domain.base import utcnow
from orgauth.domain.entities import Session

ALGORITHM = "HS256"


def generate_session_token(session: Session, secret: str) -> str:
    """
    Sign a session cookie value

    Args:
        session: Persisted session
        secret: AuthConfig.secret

    Returns:
        JWT token string (HS256), expiring with the session
    """
    payload = {
        "sid": str(session.id),
        "sub": str(session.user_id),
        "exp": session.expires_at,
        "iat": utcnow(),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_session_token(token: str, secret: str) -> Optional[dict]:
    """
    Verify and decode a session token

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
