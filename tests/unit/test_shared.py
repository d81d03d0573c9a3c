"""
Unit tests for the shared/ utility modules.

Covers:
- shared.geo             (make_point, point_lon_lat, build_bounding_box_polygon,
                          in_bounds)
- shared.crypto          (hash_password, verify_password)
- shared.jwt_utils       (access and share tokens)
- shared.datetime_utils  (ensure_utc)
- shared.generators      (generate_share_link_id)
- shared.logging         (redact_sensitive_fields, should_sample)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from config import JWTSettings
from shared.crypto import hash_password, verify_password
from shared.datetime_utils import ensure_utc
from shared.generators import generate_share_link_id
from shared.geo import build_bounding_box_polygon, in_bounds, make_point, point_lon_lat
from shared.jwt_utils import (
    generate_access_jwt,
    generate_share_jwt,
    verify_access_jwt,
    verify_share_jwt,
)
from shared import logging as app_logging


# ---------------------------------------------------------------------------
# shared.geo
# ---------------------------------------------------------------------------


class TestGeo:
    def test_make_point_is_lon_lat(self):
        assert make_point(30.5, 50.45) == {"type": "Point", "coordinates": [30.5, 50.45]}

    @pytest.mark.parametrize(
        "lon, lat",
        [(181, 0), (-181, 0), (0, 91), (0, -90.5)],
        ids=["lon_high", "lon_low", "lat_high", "lat_low"],
    )
    def test_make_point_rejects_out_of_range(self, lon, lat):
        with pytest.raises(ValueError):
            make_point(lon, lat)

    @pytest.mark.parametrize(
        "point, expected",
        [
            ({"type": "Point", "coordinates": [1, 2]}, (1.0, 2.0)),
            (None, None),
            ({"type": "Point", "coordinates": [1]}, None),
            ({}, None),
        ],
        ids=["valid", "none", "short", "empty"],
    )
    def test_point_lon_lat(self, point, expected):
        assert point_lon_lat(point) == expected

    def test_bounding_box_is_closed_ring(self):
        polygon = build_bounding_box_polygon(10, 20, 30, 40)
        ring = polygon["coordinates"][0]
        assert polygon["type"] == "Polygon"
        assert len(ring) == 5
        assert ring[0] == ring[-1] == [30, 10]
        assert [40, 20] in ring

    @pytest.mark.parametrize(
        "args",
        [(20, 10, 0, 1), (-91, 0, 0, 1), (0, 1, 0, 200)],
        ids=["inverted", "lat_out_of_range", "lon_out_of_range"],
    )
    def test_bounding_box_invalid(self, args):
        with pytest.raises(ValueError):
            build_bounding_box_polygon(*args)

    @pytest.mark.parametrize(
        "lat, lon, expected",
        [
            (50.0, 30.0, True),
            (51.0, 31.0, True),  # north-east corner is inclusive
            (49.0, 29.0, True),  # south-west corner is inclusive
            (51.01, 30.0, False),
            (50.0, 28.99, False),
        ],
        ids=["inside", "ne_corner", "sw_corner", "north_of_box", "west_of_box"],
    )
    def test_in_bounds(self, lat, lon, expected):
        assert in_bounds(lat, lon, 51.0, 31.0, 49.0, 29.0) is expected


# ---------------------------------------------------------------------------
# shared.crypto
# ---------------------------------------------------------------------------


class TestCrypto:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert hashed.startswith("$argon2")

    def test_verify_roundtrip(self):
        assert verify_password("s3cret", hash_password("s3cret")) is True

    def test_wrong_password(self):
        assert verify_password("nope", hash_password("s3cret")) is False

    def test_garbage_hash_is_false(self):
        assert verify_password("s3cret", "not-a-hash") is False


# ---------------------------------------------------------------------------
# shared.jwt_utils
# ---------------------------------------------------------------------------


class TestJwtUtils:
    def test_access_token_subject(self, jwt_settings):
        token = generate_access_jwt("user-1", jwt_settings)
        claims = verify_access_jwt(token, jwt_settings)
        assert claims["sub"] == "user-1"
        assert claims["iss"] == "geopulse"
        assert claims["aud"] == "geopulse.api"

    def test_expired_access_token(self, jwt_settings):
        token = generate_access_jwt("user-1", jwt_settings, ttl_seconds=-10)
        with pytest.raises(jwt.ExpiredSignatureError):
            verify_access_jwt(token, jwt_settings)

    def test_share_token_rejected_as_access_token(self, jwt_settings):
        token = generate_share_jwt("link-1", jwt_settings)
        with pytest.raises(jwt.InvalidTokenError):
            verify_access_jwt(token, jwt_settings)

    def test_share_token_scoped_to_link(self, jwt_settings):
        token = generate_share_jwt("link-1", jwt_settings)
        assert verify_share_jwt(token, "link-1", jwt_settings)["type"] == "share"
        with pytest.raises(jwt.InvalidTokenError):
            verify_share_jwt(token, "link-2", jwt_settings)

    def test_access_token_rejected_as_share_token(self, jwt_settings):
        token = generate_access_jwt("link-1", jwt_settings)
        with pytest.raises(jwt.InvalidTokenError):
            verify_share_jwt(token, "link-1", jwt_settings)

    def test_wrong_secret(self, jwt_settings):
        token = generate_access_jwt("user-1", jwt_settings)
        other = JWTSettings(jwt_secret="another-secret-with-enough-length-too", jwt_private_key="", jwt_public_key="")
        with pytest.raises(jwt.InvalidSignatureError):
            verify_access_jwt(token, other)

    def test_missing_secret(self):
        settings = JWTSettings(jwt_secret="", jwt_private_key="", jwt_public_key="")
        with pytest.raises(RuntimeError):
            generate_access_jwt("user-1", settings)


# ---------------------------------------------------------------------------
# shared.datetime_utils / shared.generators
# ---------------------------------------------------------------------------


class TestEnsureUtc:
    def test_naive_assumed_utc(self):
        assert ensure_utc(datetime(2024, 1, 1, 12)) == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    def test_aware_converted(self):
        kyiv = timezone(timedelta(hours=2))
        result = ensure_utc(datetime(2024, 1, 1, 12, tzinfo=kyiv))
        assert result.hour == 10
        assert result.tzinfo == timezone.utc


def test_share_link_id_is_uuid4():
    link_id = generate_share_link_id()
    assert uuid.UUID(link_id).version == 4
    assert generate_share_link_id() != link_id


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestLogging:
    def test_redacts_sensitive_keys(self):
        event = {"event": "x", "password": "p", "access_token": "t", "api_key": "k", "user_id": "u"}
        out = app_logging.redact_sensitive_fields(None, "info", event)
        assert out["password"] == out["access_token"] == out["api_key"] == "***REDACTED***"
        assert out["user_id"] == "u"
        assert out["event"] == "x"

    @pytest.mark.parametrize(
        "rate, expected",
        [(1.0, True), (0.0, False)],
        ids=["always", "never"],
    )
    def test_should_sample_bounds(self, monkeypatch, rate, expected):
        monkeypatch.setitem(app_logging.SAMPLING_RATES, "geocoding_cache_hit", rate)
        assert app_logging.should_sample("geocoding_cache_hit") is expected

    def test_unknown_event_always_sampled(self):
        assert app_logging.should_sample("something_else") is True
