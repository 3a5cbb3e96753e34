"""
Tests for Success/Failure results and failure diagnostics.
"""

import pytest

from resilify.enums import CLIENT_ERROR_CATEGORIES, ErrorCategory
from resilify.spotify.classification import DEFAULT_POLICY
from resilify.spotify.diagnostics import CLIENT_ERROR_LABELS
from resilify.spotify.exceptions import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyServerError,
)
from resilify.spotify.outcome import Failure, Success, unwrap


def _failure(error, attempts=1, waited=0.0):
    return Failure(
        DEFAULT_POLICY.classify(error),
        attempts=attempts,
        waited=waited,
        exception=error,
    )


class TestUnwrap:
    """Tests for unwrap."""

    def test_success_returns_value(self):
        assert unwrap(Success(['a', 'b'], attempts=2)) == ['a', 'b']

    def test_failure_raises_matching_error(self, make_error):
        error = make_error(404, msg='Non existing id')

        with pytest.raises(SpotifyNotFoundError) as exc_info:
            unwrap(_failure(error))

        raised = exc_info.value
        assert raised.__cause__ is error
        assert raised.failure.category == ErrorCategory.NOT_FOUND
        assert 'Non existing id' in str(raised)

    def test_rate_limit_error_carries_retry_after(self, make_error):
        failure = _failure(make_error(429, retry_after=9), attempts=5)

        with pytest.raises(SpotifyRateLimitError) as exc_info:
            failure.raise_error()

        assert exc_info.value.retry_after == 9

    def test_all_errors_share_base(self, make_error):
        for status in (401, 400, 403, 404, 429, 500):
            with pytest.raises(SpotifyError):
                _failure(make_error(status)).raise_error()

    def test_server_error_is_api_error(self, make_error):
        with pytest.raises(SpotifyAPIError) as exc_info:
            _failure(make_error(500)).raise_error()
        assert isinstance(exc_info.value, SpotifyServerError)

    def test_auth_error_is_not_api_error(self, make_error):
        with pytest.raises(SpotifyAuthError) as exc_info:
            _failure(make_error(401)).raise_error()
        assert not isinstance(exc_info.value, SpotifyAPIError)


class TestFailureEquality:
    """Failures compare by classification and counters, not by exception."""

    def test_equal_failures(self, make_error):
        first = _failure(make_error(503, msg='down'), attempts=3)
        second = _failure(make_error(503, msg='down'), attempts=3)
        assert first == second


class TestDescribe:
    """Tests for Failure.describe."""

    def test_authentication(self, make_error):
        text = _failure(make_error(401, msg='Invalid access token')).describe()

        assert text.startswith('Authentication error (401, code -1)')
        assert 'Invalid access token' in text
        assert 'Re-authenticate' in text

    def test_rate_limited(self, make_error):
        text = _failure(
            make_error(429, msg='API rate limit exceeded', retry_after=5),
            attempts=3,
        ).describe()

        assert 'Rate limited (429, code -1) after 3 attempt(s)' in text
        assert 'retry after 5s' in text

    def test_rate_limited_without_header(self, make_error):
        text = _failure(make_error(429)).describe()
        assert 'no Retry-After given' in text

    @pytest.mark.parametrize('status, label', [
        (400, 'Bad request'),
        (403, 'Forbidden'),
        (404, 'Not found'),
        (409, 'Client error'),
    ])
    def test_client_labels(self, make_error, status, label):
        text = _failure(make_error(status, msg='nope')).describe()
        assert text.startswith(f'{label} ({status}, code -1): nope')

    def test_every_client_category_has_a_label(self):
        assert set(CLIENT_ERROR_LABELS) == CLIENT_ERROR_CATEGORIES

    def test_server_error(self, make_error):
        text = _failure(make_error(502, msg='Bad gateway'), attempts=5).describe()

        assert 'Server error (502, code -1) after 5 attempt(s)' in text
        assert 'service status' in text

    def test_unclassified(self):
        text = _failure(RuntimeError('socket closed')).describe()
        assert text == 'Unexpected error: socket closed'

    def test_missing_code(self):
        class StatusOnly(Exception):
            status_code = 404

        text = _failure(StatusOnly('gone')).describe()
        assert text.startswith('Not found (404): gone')
