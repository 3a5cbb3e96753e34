"""
Spotify client facade.

Runs spotipy calls through a ResilientCaller. The spotipy instance is owned
and passed in by the caller, so tests can hand in a fake without touching
shared state.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests
import spotipy

from .credentials import SpotifyCredentials
from .error_handling import ResilientCaller
from .outcome import Outcome

logger = logging.getLogger(__name__)

# Silence spotipy's verbose logging
logging.getLogger("spotipy").setLevel(logging.WARNING)


class SpotifyClient:
    """
    Resilient wrapper around a spotipy.Spotify instance.

    ``execute`` returns a Success or Failure for any spotipy call; the named
    helpers return data directly and raise a SpotifyError on failure.

    Example:
        credentials = SpotifyCredentials.from_env()
        client = SpotifyClient.from_credentials(credentials)
        outcome = client.execute(client.spotify.track, track_id)
        tracks = client.get_playlist_tracks(playlist_id)
    """

    def __init__(
        self,
        spotify: spotipy.Spotify,
        caller: Optional[ResilientCaller] = None,
    ):
        """
        Initialize the client.

        Args:
            spotify: Authenticated spotipy client. Its own retries should be
                disabled so retry behavior comes from ``caller`` alone.
            caller: Retry wrapper; defaults to ResilientCaller().
        """
        self.spotify = spotify
        self.caller = caller or ResilientCaller()

    @classmethod
    def from_credentials(
        cls,
        credentials: SpotifyCredentials,
        caller: Optional[ResilientCaller] = None,
        requests_timeout: int = 10,
    ) -> "SpotifyClient":
        """
        Build a client-credentials spotipy client and wrap it.

        A plain requests.Session is handed to spotipy so its urllib3 retry
        adapter is never mounted; a 429 or 5xx then reaches the
        ResilientCaller on the first occurrence, with its headers intact.
        """
        spotify = spotipy.Spotify(
            auth_manager=credentials.client_credentials_manager(),
            requests_session=requests.Session(),
            requests_timeout=requests_timeout,
        )
        logger.info("Created spotipy client for %s", credentials.client_id)
        return cls(spotify, caller=caller)

    # -----------------------------------------------------------------
    # Generic execution
    # -----------------------------------------------------------------

    def execute(self, fn: Callable, *args, **kwargs) -> Outcome:
        """Call ``fn(*args, **kwargs)`` with retry, returning an Outcome."""
        return self.caller.call(
            lambda: fn(*args, **kwargs),
            description=getattr(fn, "__name__", None),
        )

    def _call(self, name: str, *args, **kwargs) -> Any:
        method = getattr(self.spotify, name)
        return self.caller.call_or_raise(
            lambda: method(*args, **kwargs), description=name,
        )

    # -----------------------------------------------------------------
    # Catalog and user lookups
    # -----------------------------------------------------------------

    def track(self, track_id: str) -> Dict[str, Any]:
        return self._call("track", track_id)

    def artist(self, artist_id: str) -> Dict[str, Any]:
        return self._call("artist", artist_id)

    def album(self, album_id: str) -> Dict[str, Any]:
        return self._call("album", album_id)

    def search(
        self, query: str, search_type: str = "track", limit: int = 10,
    ) -> Dict[str, Any]:
        """Search the catalog. ``search_type`` is spotipy's ``type``."""
        return self._call("search", q=query, type=search_type, limit=limit)

    def user(self, user_id: str) -> Dict[str, Any]:
        return self._call("user", user_id)

    def playlist(self, playlist_id: str) -> Dict[str, Any]:
        return self._call("playlist", playlist_id)

    # -----------------------------------------------------------------
    # Paginated reads
    # -----------------------------------------------------------------

    def _collect_pages(self, first_page: Optional[Dict], label: str) -> List[Dict]:
        items: List[Dict] = []
        page = first_page
        while page:
            items.extend(page.get("items") or [])
            if not page.get("next"):
                break
            page = self.caller.call_or_raise(
                lambda current=page: self.spotify.next(current),
                description=f"{label} (next page)",
            )
        return items

    def get_playlist_tracks(self, playlist_id: str) -> List[Dict[str, Any]]:
        """
        Fetch every track of a playlist.

        Pages are fetched one at a time; each is retried independently and
        entries without a track (local or removed items) are dropped.
        """
        first = self._call("playlist_items", playlist_id, limit=100)
        items = self._collect_pages(first, "playlist_items")
        tracks = [item["track"] for item in items if item.get("track")]
        logger.debug(
            "Fetched %d tracks from playlist %s", len(tracks), playlist_id,
        )
        return tracks

    def get_user_playlists(self, user_id: str) -> List[Dict[str, Any]]:
        """Fetch all public playlists of a user."""
        first = self._call("user_playlists", user_id, limit=50)
        return self._collect_pages(first, "user_playlists")
