"""Tests for bearer token handling."""

from datetime import datetime, timedelta

import pytest
from jose import jwt

from billbook.api.auth import create_access_token, decode_owner_id
from billbook.config import get_settings
from billbook.core.exceptions import AuthenticationError


def _sign(claims: dict) -> str:
    auth = get_settings().auth
    return jwt.encode(claims, auth.secret_key, algorithm=auth.algorithm)


class TestDecodeOwnerId:
    def test_round_trip(self):
        assert decode_owner_id(create_access_token(42)) == 42

    def test_falls_back_to_sub(self):
        assert decode_owner_id(_sign({"sub": "7"})) == 7

    def test_id_claim_wins_over_sub(self):
        assert decode_owner_id(_sign({"id": 3, "sub": "9"})) == 3

    def test_expired(self):
        token = create_access_token(1, expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthenticationError):
            decode_owner_id(token)

    def test_wrong_secret(self):
        token = jwt.encode(
            {"id": 1, "exp": datetime.utcnow() + timedelta(minutes=5)},
            "someone-elses-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_owner_id(token)

    @pytest.mark.parametrize("claims", [{}, {"id": "abc"}, {"id": True}])
    def test_unusable_owner_claim(self, claims):
        with pytest.raises(AuthenticationError, match="no owner id"):
            decode_owner_id(_sign(claims))
