"""Image fetchers: where tile source bytes come from."""
from .base import ImageFetcher
from .file_fetcher import FileFetcher
from .http_fetcher import RequestsFetcher
from .routing import RoutingFetcher, build_fetcher

__all__ = ["ImageFetcher", "FileFetcher", "RequestsFetcher", "RoutingFetcher", "build_fetcher"]
