from .fetcher import Fetcher, HttpFetcher

__all__ = ["Fetcher", "HttpFetcher"]
