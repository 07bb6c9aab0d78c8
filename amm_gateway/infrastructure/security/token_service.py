from __future__ import annotations

from datetime import datetime, timedelta

import jwt

from amm_gateway.application.dto.auth import AccessTokenPayload
from amm_gateway.application.ports.token_port import TokenPort


class JwtTokenService(TokenPort):
    """HS256 access tokens whose ``sub`` is the caller's address."""

    def __init__(self, *, jwt_secret: str, access_ttl_minutes: int):
        self._jwt_secret = jwt_secret
        self._access_ttl_minutes = access_ttl_minutes

    def create_access_token(self, *, caller: str, now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(minutes=self._access_ttl_minutes)
        payload = {
            "sub": caller.lower(),
            "type": "access",
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm="HS256")
        return token, exp

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=["HS256"],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        if payload.get("type") != "access":
            raise ValueError("Invalid token type.")

        caller = payload.get("sub")
        if not caller or not isinstance(caller, str):
            raise ValueError("Invalid token subject.")

        return AccessTokenPayload(caller=caller.strip().lower())
