"""Tests for the GitHub profile lookup and social score."""

import random

import httpx
import pytest

from conftest import github_transport
from models.schemas import GitHubStats
from services.github_client import GitHubClient, build_external_profile, calculate_social_score


class TestFetchStats:
    @pytest.mark.asyncio
    async def test_empty_handle_makes_no_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = GitHubClient(transport=httpx.MockTransport(handler))
        assert await client.fetch_stats("") == GitHubStats()
        assert await client.fetch_stats(None) == GitHubStats()
        assert await client.fetch_stats("   ") == GitHubStats()

    @pytest.mark.asyncio
    async def test_requests_user_endpoint(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"login": "octocat", "public_repos": 8})

        client = GitHubClient(transport=httpx.MockTransport(handler), synthetic_metrics=False)
        stats = await client.fetch_stats("octocat")
        assert seen == ["/users/octocat"]
        assert stats == GitHubStats(repos=8, stars=0, contributions=0, synthetic=False)

    @pytest.mark.asyncio
    async def test_synthetic_metrics_are_tagged_and_bounded(self):
        client = GitHubClient(
            transport=github_transport(payload={"public_repos": 3}),
            rng=random.Random(42),
        )
        stats = await client.fetch_stats("octocat")
        assert stats.repos == 3
        assert stats.synthetic is True
        assert 0 <= stats.stars <= 99
        assert 0 <= stats.contributions <= 499

    @pytest.mark.asyncio
    async def test_not_found_falls_back_to_zero(self):
        client = GitHubClient(transport=github_transport(404, {"message": "Not Found"}))
        assert await client.fetch_stats("ghost") == GitHubStats()

    @pytest.mark.asyncio
    async def test_network_error_falls_back_to_zero(self, offline_github):
        assert await offline_github.fetch_stats("octocat") == GitHubStats()

    @pytest.mark.asyncio
    async def test_malformed_payloads_fall_back_to_zero(self):
        for payload in ([1, 2, 3], {"public_repos": "many"}, {"login": "octocat"}):
            client = GitHubClient(transport=github_transport(payload=payload))
            assert await client.fetch_stats("octocat") == GitHubStats()

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back_to_zero(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>rate limited</html>")

        client = GitHubClient(transport=httpx.MockTransport(handler))
        assert await client.fetch_stats("octocat") == GitHubStats()


def test_social_score_zero():
    assert calculate_social_score(GitHubStats()) == 0


def test_social_score_formula():
    stats = GitHubStats(repos=10, stars=20, contributions=55)
    assert calculate_social_score(stats) == 35.5


def test_social_score_rounded_to_one_decimal():
    # 2 + 0.5 + 0.1 * 3 is 2.8000000000000003 before rounding
    assert calculate_social_score(GitHubStats(repos=1, stars=1, contributions=3)) == 2.8


def test_social_score_capped():
    assert calculate_social_score(GitHubStats(repos=40, stars=99, contributions=499)) == 100


def test_build_external_profile_without_handle():
    profile = build_external_profile(GitHubStats())
    assert profile.github_username is None
    assert profile.github_repos_count == 0
    assert profile.github_stars == 0
    assert profile.github_contributions == 0
    assert profile.social_score == 0
    assert profile.verification_status == "partial"
    assert profile.metrics_synthetic is False


def test_build_external_profile_verified():
    profile = build_external_profile(
        GitHubStats(repos=5, stars=10, contributions=100, synthetic=True),
        github_username="octocat",
        linkedin_url="https://linkedin.com/in/octocat",
    )
    assert profile.verification_status == "verified"
    assert profile.social_score == 25.0
    assert profile.metrics_synthetic is True
    assert profile.linkedin_url == "https://linkedin.com/in/octocat"
