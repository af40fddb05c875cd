"""Core middleware for Saakie."""

import logging

from django.conf import settings
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_bearer_token(request):
    """Return the raw session token from the Authorization header, if any."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header[len(BEARER_PREFIX):].strip() or None


def verify_session_token(token):
    """Verify an identity provider session token and return its claims.

    Raises:
        JWTError: If the signature, expiry or authorized party is invalid
    """
    config = settings.IDENTITY_PROVIDER
    key = config.get("JWT_KEY")
    if not key:
        raise JWTError("Identity provider key is not configured")

    claims = jwt.decode(
        token,
        key,
        algorithms=config.get("JWT_ALGORITHMS", ["RS256"]),
        options={"verify_aud": False},
    )

    authorized_parties = config.get("AUTHORIZED_PARTIES") or []
    azp = claims.get("azp")
    if authorized_parties and azp and azp not in authorized_parties:
        raise JWTError(f"Unauthorized party: {azp}")

    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims


class IdentityProviderMiddleware:
    """Resolve the caller's identity provider id from the session token.

    Sets request.identity_id to the token subject, or None when the request
    carries no valid token. Directory lookups happen later, per view.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.identity_id = None
        request.identity_claims = {}

        token = get_bearer_token(request)
        if token:
            try:
                claims = verify_session_token(token)
            except JWTError as e:
                logger.debug(f"Rejected session token: {e}")
            else:
                request.identity_id = claims["sub"]
                request.identity_claims = claims

        response = self.get_response(request)
        return response
