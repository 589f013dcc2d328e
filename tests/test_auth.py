"""Tests for resolving the calling member from verified token claims."""

import asyncio
import base64
import json
import time

import pytest
from fastapi import HTTPException

from app import auth
from app.auth import resolve_member, verify_firebase_token
from app.models import Member


def _segment(data):
    return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")


def _claims(**overrides):
    now = int(time.time())
    claims = {
        "aud": auth.FIREBASE_PROJECT_ID,
        "iss": f"https://securetoken.google.com/{auth.FIREBASE_PROJECT_ID}",
        "exp": now + 3600,
        "iat": now,
        "auth_time": now,
        "sub": "firebase-anna",
    }
    claims.update(overrides)
    return claims


@pytest.fixture
def members(db):
    by_uid = Member(username="uid@example.com", email="uid@example.com", firebase_uid="uid-1")
    by_username = Member(username="name@example.com", email="other@example.com")
    by_email = Member(username="someone", email="mail@example.com")
    by_key = Member(username="keyed", key="3e9b1c2d-5f6a-4b7c-8d9e-0f1a2b3c4d5e")
    by_id = Member(id=77, username="numbered")
    db.add_all([by_uid, by_username, by_email, by_key, by_id])
    db.commit()
    return {
        "uid": by_uid,
        "username": by_username,
        "email": by_email,
        "key": by_key,
        "id": by_id,
    }


class TestResolveMember:
    def test_by_firebase_uid(self, db, members):
        assert resolve_member(db, {"sub": "uid-1", "email": "mail@example.com"}) is members["uid"]

    def test_by_username(self, db, members):
        assert resolve_member(db, {"sub": "unknown", "email": "name@example.com"}) is members["username"]

    def test_by_email(self, db, members):
        assert resolve_member(db, {"sub": "unknown", "email": "mail@example.com"}) is members["email"]

    def test_by_key(self, db, members):
        claims = {"sub": "3E9B1C2D-5F6A-4B7C-8D9E-0F1A2B3C4D5E"}
        assert resolve_member(db, claims) is members["key"]

    def test_by_numeric_id(self, db, members):
        assert resolve_member(db, {"sub": "77"}) is members["id"]

    def test_unknown(self, db, members):
        assert resolve_member(db, {"sub": "nobody", "email": "nobody@example.com"}) is None
        assert resolve_member(db, {}) is None


class TestVerifyToken:
    def test_rejects_wrong_part_count(self):
        with pytest.raises(HTTPException) as exc:
            asyncio.run(verify_firebase_token("a.b"))
        assert exc.value.status_code == 401

    def test_rejects_non_rs256(self):
        token = f"{_segment({'alg': 'HS256', 'kid': 'k'})}.{_segment({'sub': 'x'})}.c2ln"
        with pytest.raises(HTTPException) as exc:
            asyncio.run(verify_firebase_token(token))
        assert exc.value.status_code == 401
        assert exc.value.detail == "Invalid token algorithm"

    def test_requires_project(self, monkeypatch):
        monkeypatch.setattr(auth, "FIREBASE_PROJECT_ID", None)
        with pytest.raises(HTTPException) as exc:
            asyncio.run(verify_firebase_token("a.b.c"))
        assert exc.value.status_code == 500

    @pytest.mark.parametrize(
        "token",
        [
            f"{_segment([])}.{_segment({'sub': 'x'})}.c2ln",
            f"{_segment('x')}.{_segment({'sub': 'x'})}.c2ln",
            f"{_segment({'alg': 'RS256', 'kid': 'k'})}.{_segment([1, 2])}.c2ln",
            f"{_segment({'alg': 'RS256', 'kid': ['k']})}.{_segment({'sub': 'x'})}.c2ln",
        ],
    )
    def test_rejects_non_object_segments(self, token):
        with pytest.raises(HTTPException) as exc:
            asyncio.run(verify_firebase_token(token))
        assert exc.value.status_code == 401

    def test_unexpected_failure_is_unauthenticated(self, monkeypatch):
        async def broken_keys(refresh=False):
            return {"k": "not a certificate"}

        monkeypatch.setattr(auth, "get_google_public_keys", broken_keys)
        token = f"{_segment({'alg': 'RS256', 'kid': 'k'})}.{_segment(_claims())}.c2ln"

        with pytest.raises(HTTPException) as exc:
            asyncio.run(verify_firebase_token(token))
        assert exc.value.status_code == 401
        assert exc.value.detail == "Token verification failed"


class TestCheckClaims:
    def test_accepts_valid_claims(self):
        auth._check_claims(_claims())

    def test_requires_auth_time(self):
        claims = _claims()
        del claims["auth_time"]

        with pytest.raises(HTTPException) as exc:
            auth._check_claims(claims)
        assert exc.value.status_code == 401
        assert exc.value.detail == "Invalid token claims"

    def test_rejects_expired(self):
        with pytest.raises(HTTPException) as exc:
            auth._check_claims(_claims(exp=int(time.time()) - 10))
        assert exc.value.headers == {"X-Token-Expired": "true"}


class TestCurrentMember:
    def test_malformed_header_segment_is_401(self, anonymous_client):
        response = anonymous_client.get(
            "/api/schedule", headers={"Authorization": "Bearer W10.e30.c2ln"}
        )
        assert response.status_code == 401

    def test_verified_token_without_member_is_401(self, anonymous_client, monkeypatch):
        async def verified(token):
            return _claims(sub="nobody", email="nobody@example.com")

        monkeypatch.setattr(auth, "verify_firebase_token", verified)

        response = anonymous_client.get("/api/schedule", headers={"Authorization": "Bearer a.b.c"})
        assert response.status_code == 401
        assert response.json() == {"detail": "Member not found"}

    def test_verified_token_resolves_member(self, anonymous_client, member, monkeypatch):
        async def verified(token):
            return _claims(sub=member.firebase_uid)

        monkeypatch.setattr(auth, "verify_firebase_token", verified)

        response = anonymous_client.get(
            "/api/schedule/member", headers={"Authorization": "Bearer a.b.c"}
        )
        assert response.status_code == 200
        assert response.json()["member"]["id"] == member.id
