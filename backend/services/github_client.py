"""GitHub profile lookup with zero-data fallback."""

import logging
import random

import httpx

from config import settings
from models.schemas import ExternalProfile, GitHubStats

logger = logging.getLogger(__name__)

MAX_SOCIAL_SCORE = 100

_client: "GitHubClient | None" = None


class GitHubClient:
    """Fetch public repository counts from the GitHub REST API.

    Any failure (transport error, non-2xx status, unexpected payload) yields
    zeroed stats; nothing is raised to the caller. Stars and contributions are
    not available from ``/users/{username}``: with ``synthetic_metrics`` they
    are random placeholders regenerated on every fetch, otherwise zero.
    """

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        synthetic_metrics: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.synthetic_metrics = synthetic_metrics
        self._transport = transport
        self._rng = rng or random.Random()

    async def _get_public_repos(self, username: str) -> int | None:
        headers = {"Accept": "application/vnd.github+json"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"/users/{username}", headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("GitHub lookup for %s returned %s", username, e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.warning("GitHub lookup for %s failed: %s", username, e)
            return None
        except ValueError as e:
            logger.warning("GitHub lookup for %s returned invalid JSON: %s", username, e)
            return None

        if not isinstance(data, dict):
            logger.warning("GitHub lookup for %s returned a non-object payload", username)
            return None
        repos = data.get("public_repos")
        if not isinstance(repos, int) or isinstance(repos, bool):
            logger.warning("GitHub lookup for %s has no public_repos count", username)
            return None
        return max(repos, 0)

    async def fetch_stats(self, username: str | None) -> GitHubStats:
        """Look up a handle. Empty handles return zeroed stats without a request."""
        username = (username or "").strip()
        if not username:
            return GitHubStats()

        repos = await self._get_public_repos(username)
        if repos is None:
            return GitHubStats()

        if not self.synthetic_metrics:
            return GitHubStats(repos=repos)
        return GitHubStats(
            repos=repos,
            stars=self._rng.randint(0, 99),
            contributions=self._rng.randint(0, 499),
            synthetic=True,
        )


def get_client() -> GitHubClient:
    global _client
    if _client is None:
        _client = GitHubClient(
            base_url=settings.github_api_url,
            timeout=settings.github_timeout_seconds,
            synthetic_metrics=settings.github_synthetic_metrics,
        )
    return _client


def calculate_social_score(stats: GitHubStats) -> float:
    """Weighted repos/stars/contributions, capped at MAX_SOCIAL_SCORE, one decimal."""
    raw = stats.repos * 2 + stats.stars * 0.5 + stats.contributions * 0.1
    return round(min(raw, MAX_SOCIAL_SCORE), 1)


def build_external_profile(
    stats: GitHubStats,
    github_username: str | None = None,
    linkedin_url: str | None = None,
) -> ExternalProfile:
    return ExternalProfile(
        github_username=github_username or None,
        linkedin_url=linkedin_url or None,
        github_repos_count=stats.repos,
        github_stars=stats.stars,
        github_contributions=stats.contributions,
        metrics_synthetic=stats.synthetic,
        social_score=calculate_social_score(stats),
        verification_status="verified" if stats.repos > 0 else "partial",
    )
