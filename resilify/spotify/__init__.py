"""
Spotify API error handling module.

Classifies failed Spotify Web API calls and retries the recoverable ones.

Architecture:
    - classification.py: ClassificationPolicy mapping failures to categories
    - retry.py: RetryPolicy bounds and backoff calculation
    - outcome.py: Success / Failure tagged results
    - diagnostics.py: Human-readable failure descriptions
    - error_handling.py: ResilientCaller and the api_error_handler decorator
    - credentials.py: SpotifyCredentials for config/DI
    - http_client.py: SpotifyHTTPClient over requests
    - client.py: SpotifyClient facade over spotipy
    - exceptions.py: Exception hierarchy

Usage:
    from resilify.spotify import (
        SpotifyClient,
        SpotifyCredentials,
        ResilientCaller,
        RetryPolicy,
        Failure,
    )

    caller = ResilientCaller(RetryPolicy(max_retries=5))
    client = SpotifyClient.from_credentials(
        SpotifyCredentials.from_env(), caller=caller,
    )

    outcome = client.execute(client.spotify.track, track_id)
    if isinstance(outcome, Failure):
        print(outcome.describe())
"""

# Classification
from .classification import (
    ApiErrorDetails,
    Classification,
    ClassificationPolicy,
    DEFAULT_POLICY,
    category_for_status,
)

# Retry
from .retry import RetryPolicy

# Results
from .outcome import Success, Failure, Outcome, unwrap

# Wrapper
from .error_handling import ResilientCaller, api_error_handler

# Credentials (for dependency injection)
from .credentials import SpotifyCredentials

# Clients
from .http_client import SpotifyHTTPClient
from .client import SpotifyClient

# Exceptions
from .exceptions import (
    SpotifyError,
    SpotifyAuthError,
    SpotifyAPIError,
    SpotifyRateLimitError,
    SpotifyClientError,
    SpotifyBadRequestError,
    SpotifyForbiddenError,
    SpotifyNotFoundError,
    SpotifyServerError,
)


__all__ = [
    # Classification
    'ApiErrorDetails',
    'Classification',
    'ClassificationPolicy',
    'DEFAULT_POLICY',
    'category_for_status',

    # Retry
    'RetryPolicy',

    # Results
    'Success',
    'Failure',
    'Outcome',
    'unwrap',

    # Wrapper
    'ResilientCaller',
    'api_error_handler',

    # Credentials
    'SpotifyCredentials',

    # Clients
    'SpotifyHTTPClient',
    'SpotifyClient',

    # Exceptions
    'SpotifyError',
    'SpotifyAuthError',
    'SpotifyAPIError',
    'SpotifyRateLimitError',
    'SpotifyClientError',
    'SpotifyBadRequestError',
    'SpotifyForbiddenError',
    'SpotifyNotFoundError',
    'SpotifyServerError',
]
