"""
Users Auth API - Token Issuer

Tokens are compact JWS strings whose payload is the user's email, signed with
the shared secret. They carry no other claims and do not expire.
"""

import logging

from jose import jws
from jose.exceptions import JWSError

from app.errors import TokenVerificationError
from app.users.models import User

logger = logging.getLogger(__name__)

SIGNATURE_FAILED = "Signature verification failed"


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Verify ``token`` against ``secret`` and return the email it carries.

    Raises TokenVerificationError with reason ``invalid_signature`` when the
    signature does not match and ``malformed`` when the token cannot be parsed.
    """
    try:
        payload = jws.verify(token, secret, algorithms=[algorithm])
    except JWSError as e:
        # jose reports a bad signature as a plain JWSError with this message
        if SIGNATURE_FAILED in str(e):
            reason = TokenVerificationError.INVALID_SIGNATURE
        else:
            reason = TokenVerificationError.MALFORMED
        logger.debug(f"Token rejected ({reason}): {e}")
        raise TokenVerificationError(reason=reason) from e

    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TokenVerificationError(reason=TokenVerificationError.MALFORMED) from e


class TokenIssuer:
    """Signs and verifies user tokens with a process-wide secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def issue(self, user: User) -> str:
        """Create a token whose payload is exactly ``user.email``."""
        return jws.sign(user.email.encode("utf-8"), self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token issued by this issuer and return its email claim."""
        return verify_token(token, self.secret, self.algorithm)
