"""Unit tests for fleetops.core.security: bcrypt hashing and the JWT token service."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta

import jwt

from fleetops.core.security import (
    BCRYPT_ROUNDS,
    TokenService,
    hash_password,
    verify_password,
)
from tests._support import TEST_SECRET, make_settings


def _tokens(**kwargs: object) -> TokenService:
    return TokenService(secret=TEST_SECRET, **kwargs)


def _issue(tokens: TokenService, now: datetime | None = None) -> str:
    return tokens.issue(
        user_id="u-1",
        email="ann@x.com",
        name="Ann",
        role="user",
        now=now,
    )


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password behave as a salted one-way hash."""

    def test_verify_matches_own_hash(self) -> None:
        self.assertTrue(verify_password("secret1", hash_password("secret1")))

    def test_verify_rejects_other_password(self) -> None:
        self.assertFalse(verify_password("secret1", hash_password("secret2")))

    def test_same_password_hashes_differently(self) -> None:
        first = hash_password("secret1")
        second = hash_password("secret1")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret1", first))
        self.assertTrue(verify_password("secret1", second))

    def test_hash_is_not_plaintext_and_embeds_cost(self) -> None:
        hashed = hash_password("secret1")
        self.assertNotIn("secret1", hashed)
        self.assertTrue(hashed.startswith("$2"))
        self.assertEqual(hashed.split("$")[2], f"{BCRYPT_ROUNDS:02d}")

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", ""))

    def test_unicode_password(self) -> None:
        self.assertTrue(verify_password("pässwörd✓", hash_password("pässwörd✓")))

    def test_password_longer_than_bcrypt_input_refused(self) -> None:
        with self.assertRaises(ValueError):
            hash_password("a" * 72 + "X")

    def test_shared_72_byte_prefix_does_not_match(self) -> None:
        stored = hash_password("a" * 72)
        self.assertTrue(verify_password("a" * 72, stored))
        self.assertFalse(verify_password("a" * 72 + "Y", stored))

    def test_multibyte_password_at_byte_limit(self) -> None:
        password = "é" * 36  # 72 bytes in UTF-8
        self.assertTrue(verify_password(password, hash_password(password)))
        with self.assertRaises(ValueError):
            hash_password(password + "a")


class TestTokenService(unittest.TestCase):
    """TokenService issues HS256 JWTs with identity claims and a one-day expiry."""

    def test_round_trip_claims(self) -> None:
        tokens = _tokens()
        claims = tokens.verify(_issue(tokens))
        self.assertEqual(claims.id, "u-1")
        self.assertEqual(claims.email, "ann@x.com")
        self.assertEqual(claims.name, "Ann")
        self.assertEqual(claims.role, "user")
        self.assertAlmostEqual(claims.exp - claims.iat, 24 * 60 * 60, places=3)

    def test_tokens_are_distinct_for_same_claims(self) -> None:
        tokens = _tokens()
        self.assertNotEqual(_issue(tokens), _issue(tokens))

    def test_valid_just_before_expiry(self) -> None:
        tokens = _tokens()
        issued = datetime.now(UTC) - timedelta(hours=23, minutes=59)
        claims = tokens.verify(_issue(tokens, now=issued))
        self.assertEqual(claims.id, "u-1")

    def test_expired_at_lifetime(self) -> None:
        tokens = _tokens()
        issued = datetime.now(UTC) - timedelta(days=1)
        with self.assertRaises(jwt.ExpiredSignatureError):
            tokens.verify(_issue(tokens, now=issued))

    def test_sub_second_issue_time_keeps_full_lifetime(self) -> None:
        tokens = _tokens()
        whole_second = datetime.now(UTC).replace(microsecond=0)
        issued = whole_second - timedelta(days=1) + timedelta(milliseconds=999)
        token = _issue(tokens, now=issued)
        self.assertEqual(tokens.verify(token, now=whole_second).id, "u-1")
        self.assertEqual(
            tokens.verify(token, now=issued + timedelta(days=1, microseconds=-1)).id, "u-1"
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            tokens.verify(token, now=issued + timedelta(days=1))

    def test_expiry_boundary_is_exact(self) -> None:
        tokens = _tokens()
        issued = datetime(2024, 3, 1, 12, 0, 0, 999_000, tzinfo=UTC)
        token = _issue(tokens, now=issued)
        self.assertEqual(
            tokens.verify(token, now=issued + timedelta(hours=23, minutes=59, seconds=59)).id,
            "u-1",
        )
        self.assertEqual(
            tokens.verify(token, now=issued + timedelta(days=1, microseconds=-1)).id, "u-1"
        )
        for late in (timedelta(days=1), timedelta(days=1, microseconds=1), timedelta(days=3)):
            with self.assertRaises(jwt.ExpiredSignatureError):
                tokens.verify(token, now=issued + late)

    def test_wrong_secret_rejected(self) -> None:
        other = TokenService(secret="another-secret-0123456789abcdefghij")
        with self.assertRaises(jwt.InvalidSignatureError):
            _tokens().verify(_issue(other))

    def test_tampered_payload_rejected(self) -> None:
        tokens = _tokens()
        header, payload, signature = _issue(tokens).split(".")
        padded = payload + "=" * (-len(payload) % 4)
        data = json.loads(base64.urlsafe_b64decode(padded))
        data["role"] = "admin"
        forged = base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()
        with self.assertRaises(jwt.PyJWTError):
            tokens.verify(f"{header}.{forged}.{signature}")

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(jwt.DecodeError):
            _tokens().verify("not.a.token")

    def test_missing_identity_claims_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"id": "u-1", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(jwt.MissingRequiredClaimError):
            _tokens().verify(token)

    def test_wrongly_typed_claims_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "id": "u-1",
                "email": "ann@x.com",
                "name": {"first": "Ann"},
                "role": "user",
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(jwt.InvalidTokenError):
            _tokens().verify(token)

    def test_unsigned_token_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "id": "u-1",
                "email": "ann@x.com",
                "name": "Ann",
                "role": "admin",
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            None,
            algorithm="none",
        )
        with self.assertRaises(jwt.PyJWTError):
            _tokens().verify(token)

    def test_from_settings_uses_configured_lifetime(self) -> None:
        tokens = TokenService.from_settings(make_settings(JWT_EXPIRE_MINUTES=30))
        claims = tokens.verify(_issue(tokens))
        self.assertAlmostEqual(claims.exp - claims.iat, 30 * 60, places=3)

    def test_empty_secret_refused(self) -> None:
        with self.assertRaises(ValueError):
            TokenService(secret="")


if __name__ == "__main__":
    unittest.main()
