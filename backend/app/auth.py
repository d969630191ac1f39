# backend/app/auth.py
"""
Bearer-token verification for the TuitionHub API.

Two modes, chosen by configuration:

* provider mode (``IDENTITY_JWKS_URL`` set): RS256 ID tokens issued by the
  identity provider (e.g. Firebase) are checked against its JWKS, audience
  and issuer;
* shared-secret mode: HS256 tokens signed with ``SECRET_KEY``, used for
  local development and tests.

Either way the caller is identified by the token's verified ``email`` claim.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from functools import lru_cache
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from jwt import PyJWTError

from .core.config import settings
from .core.exceptions import InvalidCredentialException, UnauthenticatedException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    """Extract the raw secret from SecretStr values."""
    if hasattr(secret_obj, "get_secret_value"):
        return cast(str, secret_obj.get_secret_value())
    return str(secret_obj)


@lru_cache(maxsize=4)
def _jwks_client(jwks_url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(jwks_url, cache_keys=True, timeout=10)


class IdentityVerifier:
    """Validates bearer credentials and extracts the caller's verified email."""

    def __init__(
        self,
        *,
        jwks_url: Optional[str] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
    ):
        self.jwks_url = (settings.identity_jwks_url if jwks_url is None else jwks_url).strip()
        self.audience = settings.identity_audience if audience is None else audience
        self.issuer = settings.identity_issuer if issuer is None else issuer

    @property
    def provider_mode(self) -> bool:
        return bool(self.jwks_url)

    def verify(self, credential: Optional[str]) -> str:
        """
        Return the verified email carried by ``credential``.

        Raises:
            UnauthenticatedException: If no credential was supplied
            InvalidCredentialException: If the token fails verification or has no email
        """
        if not credential:
            raise UnauthenticatedException()

        try:
            payload = self._decode(credential)
        except PyJWTError as e:
            logger.warning(f"JWT validation error: {str(e)}")
            raise InvalidCredentialException()

        email = payload.get("email")
        if not isinstance(email, str) or not email:
            logger.warning("Token payload missing 'email' claim")
            raise InvalidCredentialException()
        return email

    def _decode(self, token: str) -> Dict[str, Any]:
        if self.provider_mode:
            signing_key = _jwks_client(self.jwks_url).get_signing_key_from_jwt(token)
            options = {"verify_aud": bool(self.audience), "verify_iss": bool(self.issuer)}
            return cast(
                Dict[str, Any],
                jwt.decode(
                    token,
                    signing_key.key,
                    algorithms=["RS256"],
                    audience=self.audience or None,
                    issuer=self.issuer or None,
                    options=options,
                ),
            )
        return cast(
            Dict[str, Any],
            jwt.decode(
                token,
                _secret_value(settings.secret_key),
                algorithms=[settings.algorithm],
                options={"verify_aud": False},
            ),
        )


def create_access_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Mint a shared-secret token for ``email``.

    Only meaningful in shared-secret mode (local development and tests).
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode = {"sub": email, "email": email, "exp": expire}
    return cast(
        str,
        jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm),
    )


@lru_cache(maxsize=1)
def get_identity_verifier() -> IdentityVerifier:
    return IdentityVerifier()


async def get_current_user_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """
    Dependency returning the verified email of the caller.

    Verification may fetch provider keys over the network, so it runs in a
    worker thread.
    """
    token = credentials.credentials if credentials else None
    if not token:
        raise UnauthenticatedException()
    email = await asyncio.to_thread(verifier.verify, token)
    logger.debug(f"Successfully validated token for user: {email}")
    return email
