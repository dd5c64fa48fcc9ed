"""Unit tests for ClientConfig and alternate base URLs."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from hiremate.client.config import ClientConfig, local_alternate_url


def _config(**overrides: object) -> ClientConfig:
    values: dict[str, object] = {"base_url": "http://localhost:5001", "fallback_base_urls": []}
    values.update(overrides)
    return ClientConfig(**values)


class TestLocalAlternateUrl:
    """Tests for the development port swap."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("http://localhost:5001", "http://localhost:5000"),
            ("http://localhost:5000", "http://localhost:5001"),
            ("http://127.0.0.1:5000", "http://127.0.0.1:5001"),
        ],
    )
    def test_swaps_local_ports(self, url: str, expected: str) -> None:
        """Local hosts on 5000/5001 swap to the other port."""
        assert local_alternate_url(url) == expected

    @pytest.mark.parametrize(
        "url",
        ["https://api.example.com", "http://localhost:8000", "http://example.com:5001"],
    )
    def test_no_alternate_elsewhere(self, url: str) -> None:
        """Other hosts and ports have no alternate."""
        assert local_alternate_url(url) is None


class TestClientConfig:
    """Tests for ClientConfig validation and defaults."""

    def test_defaults(self) -> None:
        """Timeouts and history windows have the documented defaults."""
        config = _config()

        check.equal(config.stream_timeout, 30.0)
        check.equal(config.request_timeout, 30.0)
        check.equal(config.stream_history_turns, 5)
        check.equal(config.ask_history_turns, 10)
        check.equal(config.max_parse_failures, 20)

    def test_strips_trailing_slash(self) -> None:
        """Base URL is normalized without trailing slash."""
        assert _config(base_url="https://api.example.com/").base_url == "https://api.example.com"

    def test_rejects_url_without_scheme(self) -> None:
        """Base URL must be http or https."""
        with pytest.raises(ValidationError, match="http"):
            _config(base_url="localhost:5001")

    def test_rejects_non_positive_timeout(self) -> None:
        """Stream timeout must be positive."""
        with pytest.raises(ValidationError):
            _config(stream_timeout=0)

    def test_candidates_include_local_alternate(self) -> None:
        """Local development URLs get one alternate."""
        assert _config().candidate_base_urls() == [
            "http://localhost:5001",
            "http://localhost:5000",
        ]

    def test_candidates_without_alternate(self) -> None:
        """Remote URLs are tried alone."""
        config = _config(base_url="https://api.example.com")

        assert config.candidate_base_urls() == ["https://api.example.com"]

    def test_explicit_fallback_wins(self) -> None:
        """Configured fallbacks replace the port swap; only the first is used."""
        config = _config(
            base_url="https://api.example.com",
            fallback_base_urls=["https://backup.example.com/", "https://other.example.com"],
        )

        assert config.candidate_base_urls() == [
            "https://api.example.com",
            "https://backup.example.com",
        ]

    def test_fallback_equal_to_primary_is_ignored(self) -> None:
        """A fallback identical to the primary is not retried."""
        config = _config(fallback_base_urls=["http://localhost:5001"])

        assert config.candidate_base_urls() == ["http://localhost:5001"]

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Base URL and fallbacks load from environment variables."""
        monkeypatch.setenv("HIREMATE_API_BASE_URL", "https://coach.example.com")
        monkeypatch.setenv("HIREMATE_FALLBACK_BASE_URLS", "https://a.example.com, https://b.example.com")

        config = ClientConfig()

        check.equal(config.base_url, "https://coach.example.com")
        check.equal(config.fallback_base_urls, ["https://a.example.com", "https://b.example.com"])
