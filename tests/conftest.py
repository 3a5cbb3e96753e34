"""
Pytest configuration and shared fixtures for Resilify tests.

Provides a recording fake for sleep, a factory for spotipy exceptions,
and callers wired to both.
"""

import pytest
import spotipy

from resilify.spotify.error_handling import ResilientCaller
from resilify.spotify.retry import RetryPolicy


class SleepRecorder:
    """Stands in for time.sleep and remembers every delay."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)

    @property
    def total(self):
        return sum(self.delays)


@pytest.fixture
def sleeps():
    """A fake sleep function recording requested delays."""
    return SleepRecorder()


@pytest.fixture
def make_error():
    """Factory for spotipy.SpotifyException with optional Retry-After."""
    def _make(status, msg='error', code=-1, retry_after=None, headers=None):
        headers = dict(headers or {})
        if retry_after is not None:
            headers['Retry-After'] = str(retry_after)
        return spotipy.SpotifyException(
            status, code, msg, headers=headers or None,
        )
    return _make


@pytest.fixture
def caller(sleeps):
    """A caller with base delay 1s and the default retry count."""
    return ResilientCaller(RetryPolicy(base_delay=1), sleep=sleeps)


@pytest.fixture
def failing_then():
    """
    Factory for an operation that raises or returns each entry in turn.

    Entries that are exceptions are raised; anything else is returned.
    The returned callable exposes ``calls`` for assertions.
    """
    def _build(results):
        remaining = list(results)

        def operation():
            operation.calls += 1
            if len(remaining) > 1:
                result = remaining.pop(0)
            else:
                result = remaining[0]
            if isinstance(result, BaseException):
                raise result
            return result

        operation.calls = 0
        return operation
    return _build


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_track():
    """Sample Spotify track data."""
    return {
        'id': 'track1',
        'name': 'Track 1',
        'uri': 'spotify:track:track1',
        'duration_ms': 210000,
        'artists': [{'id': 'artist1', 'name': 'Artist 1'}],
        'album': {'id': 'album1', 'name': 'Album 1'},
    }


@pytest.fixture
def sample_playlists():
    """List of sample playlists."""
    return [
        {
            'id': 'playlist1',
            'name': 'Playlist 1',
            'owner': {'id': 'user123'},
            'tracks': {'total': 10},
        },
        {
            'id': 'playlist2',
            'name': 'Playlist 2',
            'owner': {'id': 'user123'},
            'tracks': {'total': 25},
        },
    ]
