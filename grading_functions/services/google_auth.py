"""
Google OAuth2 access tokens for service accounts.

Signs an RS256 assertion with PyJWT and exchanges it at Google's token
endpoint using the JWT-bearer grant. Tokens are minted fresh for every
image extraction; nothing is cached between calls.
"""
import time
import logging

import jwt
import requests

from ..errors import AuthExchangeError

logger = logging.getLogger(__name__)

TOKEN_URL = "https://oauth2.googleapis.com/token"
VISION_SCOPE = "https://www.googleapis.com/auth/cloud-vision"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
TOKEN_LIFETIME = 3600


def build_assertion(account, now=None):
    """Return the signed JWT asserting the service account's identity."""
    issued_at = int(now if now is not None else time.time())
    claims = {
        "iss": account.client_email,
        "scope": VISION_SCOPE,
        "aud": TOKEN_URL,
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME,
    }
    try:
        return jwt.encode(claims, account.private_key, algorithm="RS256",
                          headers={"typ": "JWT"})
    except (ValueError, TypeError, jwt.PyJWTError) as e:
        raise AuthExchangeError(f"Failed to sign access token request: {e}")


def fetch_access_token(account, session=None, now=None, timeout=30):
    """Exchange a signed assertion for a bearer token valid for Cloud Vision."""
    assertion = build_assertion(account, now=now)
    http = session or requests

    try:
        response = http.post(
            TOKEN_URL,
            data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise AuthExchangeError(f"Failed to get access token: {e}")

    if not response.ok:
        raise AuthExchangeError(f"Failed to get access token: {response.text}",
                                detail=response.text)

    try:
        token = response.json().get("access_token")
    except ValueError:
        token = None
    if not token:
        raise AuthExchangeError("Failed to get access token: no access_token in response")

    logger.debug("Minted Vision access token for %s", account.client_email)
    return token
