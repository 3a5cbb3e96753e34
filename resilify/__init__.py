"""
Resilify: resilient error handling for the Spotify Web API.

Classifies failed API calls (authentication, rate limiting, client-side,
server-side) and retries the recoverable ones. See ``resilify.spotify``
for the public API.
"""

__version__ = "0.1.0"
