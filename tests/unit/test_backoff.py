"""Tests for exponential backoff with jitter."""

import pytest

from wouaka.sdk.backoff import calculate_backoff


class TestCalculateBackoff:
    """Test delay computation."""

    def test_midpoint_random_means_no_jitter(self):
        """Should return the exact base delay when the random draw is 0.5."""
        assert calculate_backoff(0, random_source=lambda: 0.5) == 1000

    @pytest.mark.parametrize(
        ("attempt", "expected"),
        [(0, 1000), (1, 2000), (2, 4000), (3, 8000), (4, 16000)],
    )
    def test_doubles_per_attempt(self, attempt, expected):
        """Should double the delay with each attempt."""
        assert calculate_backoff(attempt, random_source=lambda: 0.5) == expected

    @pytest.mark.parametrize("attempt", [5, 6, 10, 30])
    def test_caps_at_max_delay(self, attempt):
        """Should never exceed the 30s cap without jitter."""
        assert calculate_backoff(attempt, random_source=lambda: 0.5) == 30000

    def test_jitter_lower_bound(self):
        """Should subtract up to 25% when the random draw is 0."""
        assert calculate_backoff(2, random_source=lambda: 0.0) == 3000

    def test_jitter_upper_bound(self):
        """Should add up to 25% when the random draw approaches 1."""
        assert calculate_backoff(2, random_source=lambda: 0.999999) == 5000

    def test_positive_jitter_never_exceeds_max(self):
        """Should clamp capped delays so jitter cannot push past max_ms."""
        assert calculate_backoff(10, random_source=lambda: 0.999999) == 30000

    @pytest.mark.parametrize("attempt", range(12))
    def test_always_within_bounds(self, attempt):
        """Should stay within [0, max_ms] for the real random source."""
        for _ in range(50):
            delay = calculate_backoff(attempt)
            assert 0 <= delay <= 30000

    def test_custom_base_and_max(self):
        """Should honor custom base and max values."""
        assert calculate_backoff(0, base_ms=100, max_ms=1000, random_source=lambda: 0.5) == 100
        assert calculate_backoff(8, base_ms=100, max_ms=1000, random_source=lambda: 0.5) == 1000
