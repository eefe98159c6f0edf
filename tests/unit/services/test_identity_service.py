"""
Unit tests for IdentityService
"""

import pytest

from app.services.identity_service import (
    IdentityService,
    fallback_username,
    profile_from_payload,
    requested_username,
)
from app.services.tapestry_client import UpstreamIdentityError


class TestIdentityService:
    """Test suite for wallet -> profile resolution."""

    def test_fallback_username(self, sample_wallet):
        assert fallback_username(sample_wallet) == "user_7xKXtg"

    def test_requested_username(self, sample_wallet):
        assert requested_username(sample_wallet) == "user_7xKXtg"
        assert requested_username(sample_wallet, "") == "user_7xKXtg"
        assert requested_username(sample_wallet, "night_owl") == "night_owl"

    async def test_resolve_raw_uses_same_username(self, tapestry_client, fake_tapestry, sample_wallet):
        service = IdentityService(tapestry_client)

        payload = await service.resolve_raw(sample_wallet)
        await service.resolve(sample_wallet)

        assert payload == fake_tapestry.profile_payload
        usernames = [fake_tapestry.body(r)["username"] for r in fake_tapestry.requests]
        assert usernames == ["user_7xKXtg", "user_7xKXtg"]

    async def test_resolve_uses_upstream_id(self, tapestry_client, fake_tapestry, sample_wallet):
        service = IdentityService(tapestry_client)

        profile = await service.resolve(sample_wallet)

        assert profile.id == "profile-me"
        assert profile.username == "me"
        assert len(fake_tapestry.requests) == 1
        body = fake_tapestry.body(fake_tapestry.requests[0])
        assert body["username"] == "user_7xKXtg"

    async def test_resolve_falls_back_to_derived_username(self, tapestry_client, fake_tapestry, sample_wallet):
        fake_tapestry.profile_payload = {"ok": True}
        service = IdentityService(tapestry_client)

        profile = await service.resolve(sample_wallet)

        assert profile.id == "user_7xKXtg"
        assert profile.username == "user_7xKXtg"

    async def test_resolve_with_custom_username(self, tapestry_client, fake_tapestry, sample_wallet):
        service = IdentityService(tapestry_client)

        await service.resolve(sample_wallet, username="graveyard_shift")

        assert fake_tapestry.body(fake_tapestry.requests[0])["username"] == "graveyard_shift"

    async def test_upstream_error_not_retried(self, tapestry_client, fake_tapestry, sample_wallet):
        fake_tapestry.profile_status = 500
        service = IdentityService(tapestry_client)

        with pytest.raises(UpstreamIdentityError) as exc_info:
            await service.resolve(sample_wallet)

        assert exc_info.value.status_code == 500
        assert len(fake_tapestry.requests) == 1

    @pytest.mark.parametrize("payload,expected", [
        ({"profile": {"id": "x", "username": "u"}}, ("x", "u")),
        ({"profile": {"username": "u"}}, ("u", "u")),
        ({"profile": {"id": "x"}}, ("x", "fallback")),
        ({"profile": None}, ("fallback", "fallback")),
        (None, ("fallback", "fallback")),
    ])
    def test_profile_from_payload(self, payload, expected):
        profile = profile_from_payload(payload, "fallback")
        assert (profile.id, profile.username) == expected
