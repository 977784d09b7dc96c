# products/services/catalog_cache.py

"""
CATALOG CACHE

Purpose:
- Read-through cache for product/category API payloads.
- Wraps an injected Django cache backend (Redis in prod, LocMem in dev/tests).

Key scheme:
- product:v<M>:<id>                   product detail
- category:<id>                       category detail
- categories:all / categories:featured
- products:list:v<N>:<hash>           listing pages (hash of query params)
- products:recs:v<N>:<id>             recommendations for one product
- products:trending:v<N>              trending products

Listings, recommendations and trending carry the listing version N. Any
product or category write bumps N, which orphans every listing key at once
(old entries simply expire). Product details carry the detail version M: a
product write deletes its own key, a category write bumps M because every
product payload embeds its category. No wildcard scans.

Rules:
- The cache is never the source of truth for stock decisions.
- Backend failures are logged and behave like a miss.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Iterable, Optional

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

LIST_VERSION_KEY = "products:list:version"
DETAIL_VERSION_KEY = "products:detail:version"

DEFAULT_TTL = {
    "SHORT": 60,
    "MEDIUM": 300,
    "LONG": 3600,
}


# ------------------------------------------------------
# Key derivation
# ------------------------------------------------------
def product_key(product_id, version: int = 1) -> str:
    return f"product:v{version}:{product_id}"


def category_key(category_id) -> str:
    return f"category:{category_id}"


def categories_key(scope: str = "all") -> str:
    return f"categories:{scope}"


def params_hash(params: dict) -> str:
    """
    Stable hash of query params: key order and list order of a single key
    do not change the result.
    """
    normalized = {str(k): sorted(str(v) for v in (vals if isinstance(vals, (list, tuple)) else [vals]))
                  for k, vals in params.items()}
    raw = json.dumps(normalized, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:32]


class CatalogCache:
    def __init__(self, backend=None, *, ttl: Optional[dict] = None):
        self.backend = backend if backend is not None else caches["default"]
        self.ttl = {**DEFAULT_TTL, **(ttl if ttl is not None else getattr(settings, "CACHE_TTL", {}))}

    # --------------------------------------------------
    # Low level (failure == miss)
    # --------------------------------------------------
    def get(self, key: str) -> Any:
        try:
            return self.backend.get(key)
        except Exception:
            logger.warning("Cache get failed", extra={"cache_key": key}, exc_info=True)
            return None

    def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            self.backend.set(key, value, ttl)
        except Exception:
            logger.warning("Cache set failed", extra={"cache_key": key}, exc_info=True)

    def delete_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        try:
            self.backend.delete_many(keys)
        except Exception:
            logger.warning("Cache delete failed", extra={"cache_keys": keys}, exc_info=True)

    # --------------------------------------------------
    # Versions
    # --------------------------------------------------
    def _version(self, version_key: str) -> int:
        version = self.get(version_key)
        if version is None:
            return 1
        return int(version)

    def _bump(self, version_key: str) -> None:
        try:
            # add() is a no-op when the key exists; incr() fails when it does not.
            self.backend.add(version_key, 1, None)
            self.backend.incr(version_key)
        except Exception:
            logger.warning("Cache version bump failed", extra={"cache_key": version_key}, exc_info=True)

    def listing_version(self) -> int:
        return self._version(LIST_VERSION_KEY)

    def detail_version(self) -> int:
        return self._version(DETAIL_VERSION_KEY)

    def bump_listing_version(self) -> None:
        self._bump(LIST_VERSION_KEY)

    def product_detail_key(self, product_id) -> str:
        return product_key(product_id, self.detail_version())

    def listing_key(self, params: dict) -> str:
        return f"products:list:v{self.listing_version()}:{params_hash(params)}"

    def recommendations_key(self, product_id) -> str:
        return f"products:recs:v{self.listing_version()}:{product_id}"

    def trending_key(self) -> str:
        return f"products:trending:v{self.listing_version()}"

    # --------------------------------------------------
    # Products
    # --------------------------------------------------
    def get_product(self, product_id):
        return self.get(self.product_detail_key(product_id))

    def set_product(self, product_id, payload) -> None:
        self.set(self.product_detail_key(product_id), payload, self.ttl["MEDIUM"])

    def get_listing(self, params: dict):
        return self.get(self.listing_key(params))

    def set_listing(self, params: dict, payload) -> None:
        self.set(self.listing_key(params), payload, self.ttl["SHORT"])

    def get_recommendations(self, product_id):
        return self.get(self.recommendations_key(product_id))

    def set_recommendations(self, product_id, payload) -> None:
        self.set(self.recommendations_key(product_id), payload, self.ttl["MEDIUM"])

    def get_trending(self):
        return self.get(self.trending_key())

    def set_trending(self, payload) -> None:
        self.set(self.trending_key(), payload, self.ttl["MEDIUM"])

    def invalidate_products(self, product_ids: Iterable) -> None:
        ids = [str(pid) for pid in product_ids]
        if ids:
            self.delete_many(self.product_detail_key(pid) for pid in ids)
        self.bump_listing_version()
        logger.debug("Catalog cache invalidated", extra={"product_ids": ids})

    # --------------------------------------------------
    # Categories
    # --------------------------------------------------
    def get_categories(self, scope: str = "all"):
        return self.get(categories_key(scope))

    def set_categories(self, scope: str, payload) -> None:
        self.set(categories_key(scope), payload, self.ttl["LONG"])

    def get_category(self, category_id):
        return self.get(category_key(category_id))

    def set_category(self, category_id, payload) -> None:
        self.set(category_key(category_id), payload, self.ttl["LONG"])

    def invalidate_categories(self, category_id=None) -> None:
        keys = [categories_key("all"), categories_key("featured")]
        if category_id is not None:
            keys.append(category_key(category_id))
        self.delete_many(keys)
        # product payloads embed the category name
        self._bump(DETAIL_VERSION_KEY)
        self.bump_listing_version()


def get_catalog_cache() -> CatalogCache:
    return CatalogCache(caches["default"])
