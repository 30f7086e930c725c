"""Concurrency — fixed-window rate limiting for document submission."""

from crptapi.concurrency.rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
