"""
Bearer token issuing and verification.

Accounts live elsewhere; this service only trusts HS256 tokens signed with
SECRET_KEY that carry `user_id`, `email` and `is_admin`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError
from src.service.cinema.domain.entity.user_entity import UserEntity


class JwtAuth:
    def __init__(self, *, secret_key: SecretStr, algorithm: str, expire_minutes: int) -> None:
        self.secret = secret_key.get_secret_value()
        self.algorithm = algorithm
        self.token_expire = timedelta(minutes=expire_minutes)

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            'sub': str(user_entity.id),
            'exp': now + self.token_expire,
            'iat': now,
            'user_id': user_entity.id,
            'email': user_entity.email,
            'is_admin': user_entity.is_admin,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError('Token has expired')
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        user_id = payload.get('user_id')
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise AuthenticationError('Invalid token')

        return UserEntity(
            id=user_id,
            email=str(payload.get('email') or ''),
            is_admin=bool(payload.get('is_admin', False)),
        )
