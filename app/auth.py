import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import jwt
from fastapi import Depends, Header, Request

from app.errors import InvalidToken, MissingToken

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=24)
ALGORITHM = "HS256"

# The only claim ever issued: there are no roles or scopes beyond "is the admin"
ADMIN_CLAIM = "admin"


@dataclass
class LoginResult:
    success: bool
    token: Optional[str] = None
    error: Optional[str] = None


class AuthGate:
    """
    Stateless admin authentication with a single shared password.

    A successful login mints an HS256 JWT carrying {"admin": true} that expires
    after token_ttl. Verification only checks signature and expiry: nothing is
    stored server-side, so a token stays valid until it expires.
    """

    def __init__(
        self,
        secret: str,
        admin_password: str,
        token_ttl: timedelta = TOKEN_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._secret = secret
        self._admin_password = admin_password
        self.token_ttl = token_ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # --- Login ---

    def login(self, password: Any) -> LoginResult:
        """Exchange the admin password for a signed token."""
        if not self._password_matches(password):
            logger.warning("Admin login rejected: invalid password")
            return LoginResult(success=False, error="Invalid password")

        logger.info("Admin login succeeded: issuing token")
        return LoginResult(success=True, token=self.issue_token())

    def _password_matches(self, password: Any) -> bool:
        if not isinstance(password, str):
            return False
        # Outcome identical to ==; timing does not depend on where the strings differ
        return hmac.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8"))

    def issue_token(self) -> str:
        issued_at = self._clock()
        payload = {
            ADMIN_CLAIM: True,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    # --- Verification ---

    def verify_token(self, token: str) -> dict[str, Any]:
        """
        Decode a token and return its claims.

        Raises:
            InvalidToken: bad signature, expired, malformed, or missing the admin claim
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired token")
            raise InvalidToken() from e
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid token: {e}")
            raise InvalidToken() from e

        if claims.get(ADMIN_CLAIM) is not True:
            logger.info("Rejected token without admin claim")
            raise InvalidToken()
        return claims

    def authorize(self, authorization: Optional[str]) -> dict[str, Any]:
        """
        Check an Authorization header of the form "Bearer <token>".
        The token is the second space-separated segment; if there is none the
        request carries no credential at all.

        Raises:
            MissingToken: header absent or without a token segment
            InvalidToken: token present but not acceptable
        """
        parts = (authorization or "").split(" ")
        token = parts[1] if len(parts) > 1 else ""
        if not token:
            raise MissingToken()
        return self.verify_token(token)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

def get_auth_gate(request: Request) -> AuthGate:
    """The AuthGate built at startup from Settings."""
    return request.app.state.auth_gate


def require_admin(
    request: Request,
    authorization: Optional[str] = Header(None),
    gate: AuthGate = Depends(get_auth_gate),
) -> dict[str, Any]:
    """Guard for mutating routes: short-circuits with 401/403 unless a valid admin token is presented."""
    claims = gate.authorize(authorization)
    request.state.admin = claims
    return claims
