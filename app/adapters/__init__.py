"""Adapters for services outside the chat store."""

from app.adapters.avatar_fetcher import AvatarFetcher

__all__ = ["AvatarFetcher"]
