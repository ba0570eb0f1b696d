"""
Forward Reference Fixtures

Every annotation in this module is a string (PEP 563).
"""

from __future__ import annotations

from fixtures import CacheService, Database


class LateService:
    """References a class defined further down"""

    def __init__(self, dependency: LateDependency, cache: CacheService | None = None):
        self.dependency = dependency
        self.cache = cache


class LateDependency:
    def __init__(self, db: Database):
        self.db = db


def broken(dependency: DoesNotExist):  # noqa: F821
    return dependency
