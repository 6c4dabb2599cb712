"""Unit tests for transcache.

This package contains test modules for the cache, provider, coordinator, engines and configuration.
Tests use pytest with asyncio support and fake external services via monkeypatch.
"""
