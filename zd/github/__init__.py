"""GitHub REST API access (releases only)."""

from zd.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from zd.github.releases import ReleasesApi

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "ReleasesApi",
]
