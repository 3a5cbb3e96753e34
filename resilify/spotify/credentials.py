"""
Spotify credentials management.

Provides a clean dataclass for Spotify application credentials, passed
explicitly to whatever builds the API client.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from spotipy.oauth2 import SpotifyClientCredentials


@dataclass(frozen=True)
class SpotifyCredentials:
    """
    Immutable container for Spotify application credentials.

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        redirect_uri: The OAuth callback URL, if the app uses one.

    Example:
        # Create from a config class or dict
        credentials = SpotifyCredentials.from_config(Config)

        # Or create directly
        credentials = SpotifyCredentials(
            client_id='your_client_id',
            client_secret='your_client_secret',
        )
    """

    client_id: str
    client_secret: str
    redirect_uri: Optional[str] = None

    def __post_init__(self):
        """Validate credentials on creation."""
        if not self.client_id:
            raise ValueError("client_id is required")
        if not self.client_secret:
            raise ValueError("client_secret is required")

    @classmethod
    def from_config(cls, config: Any) -> 'SpotifyCredentials':
        """
        Create credentials from a Config class or config dictionary.

        Args:
            config: Object or mapping with SPOTIFY_* settings.

        Returns:
            SpotifyCredentials instance.

        Raises:
            ValueError: If required config keys are missing.
        """
        if isinstance(config, Mapping):
            get = config.get
        else:
            def get(key, default=None):
                return getattr(config, key, default)
        return cls(
            client_id=get('SPOTIFY_CLIENT_ID') or '',
            client_secret=get('SPOTIFY_CLIENT_SECRET') or '',
            redirect_uri=get('SPOTIFY_REDIRECT_URI') or None,
        )

    @classmethod
    def from_env(cls) -> 'SpotifyCredentials':
        """
        Create credentials from environment variables.

        Raises:
            ValueError: If required environment variables are missing.
        """
        return cls(
            client_id=os.getenv('SPOTIFY_CLIENT_ID', ''),
            client_secret=os.getenv('SPOTIFY_CLIENT_SECRET', ''),
            redirect_uri=os.getenv('SPOTIFY_REDIRECT_URI') or None,
        )

    def client_credentials_manager(self) -> SpotifyClientCredentials:
        """Build a spotipy auth manager for the client credentials flow."""
        return SpotifyClientCredentials(
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

    def to_dict(self) -> dict:
        return {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'redirect_uri': self.redirect_uri
        }
