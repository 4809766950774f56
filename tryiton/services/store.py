"""JSON-file persistence for the merchant's widget data.

Holds widget settings, the product list and a rolling window of recent try-on
results per shopper session. The try-on pipeline itself never reads or writes here.
"""
import json
import os
import threading
import time
from typing import Any, Callable, Dict, List, Optional

import structlog

from ..config import settings as app_settings
from ..schemas.widget import Product, WidgetSettings


logger = structlog.get_logger("tryiton")

SETTINGS_FILE = "tryiton_widget_settings.json"
PRODUCTS_FILE = "tryiton_products.json"
RESULTS_FILE = "tryiton_results_cache.json"


DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "Classic Denim Jacket",
        "price": 89.99,
        "image": "https://i.imgur.com/4YXbGFa.jpeg",
        "type": "jacket",
        "enabled": True,
        "variants": [
            {"id": "1-1", "title": "Blue / S", "price": 89.99, "image": "https://i.imgur.com/4YXbGFa.jpeg"},
            {"id": "1-2", "title": "Blue / M", "price": 89.99, "image": "https://i.imgur.com/GVKWHE1.jpeg"},
            {"id": "1-3", "title": "Black / M", "price": 94.99, "image": "https://i.imgur.com/qrPir0t.jpeg"},
        ],
    },
    {
        "id": "2",
        "title": "Cotton T-Shirt",
        "price": 29.99,
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800&q=80",
        "type": "shirt",
        "enabled": True,
        "variants": [
            {"id": "2-1", "title": "White / M", "price": 29.99, "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800&q=80"},
            {"id": "2-2", "title": "White / L", "price": 29.99, "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=800&q=80"},
        ],
    },
    {
        "id": "3",
        "title": "Leather Handbag",
        "price": 149.99,
        "image": "https://images.unsplash.com/photo-1590874103328-eac38a683ce7?w=800&q=80",
        "type": "bag",
        "enabled": False,
        "variants": [
            {"id": "3-1", "title": "Brown", "price": 149.99, "image": "https://images.unsplash.com/photo-1590874103328-eac38a683ce7?w=800&q=80"},
            {"id": "3-2", "title": "Black", "price": 149.99, "image": "https://images.unsplash.com/photo-1548036328-c9fa89d128fa?w=800&q=80"},
        ],
    },
]


def _now_ms() -> int:
    return int(time.time() * 1000)


class WidgetStore:
    def __init__(
        self,
        storage_dir: Optional[str] = None,
        result_limit: Optional[int] = None,
        result_ttl_seconds: Optional[int] = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.storage_dir = storage_dir or app_settings.storage_dir
        self.result_limit = result_limit if result_limit is not None else app_settings.result_cache_limit
        ttl = result_ttl_seconds if result_ttl_seconds is not None else app_settings.result_cache_ttl_seconds
        self.result_ttl_ms = ttl * 1000
        self.clock = clock
        self._lock = threading.Lock()

    # -- raw file access -------------------------------------------------

    def _path(self, name: str) -> str:
        return os.path.join(self.storage_dir, name)

    def _read(self, name: str) -> Any:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            # Corrupt file: behave as if nothing was stored
            logger.warning("store_read_failed", file=name, error=str(e))
            return None

    def _write(self, name: str, data: Any) -> None:
        os.makedirs(self.storage_dir, exist_ok=True)
        path = self._path(name)
        tmp = f"{path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp, path)

    # -- widget settings -------------------------------------------------

    def get_settings(self) -> WidgetSettings:
        stored = self._read(SETTINGS_FILE)
        if not isinstance(stored, dict):
            return WidgetSettings()
        try:
            return WidgetSettings(**stored)
        except ValueError:
            return WidgetSettings()

    def save_settings(self, widget_settings: WidgetSettings) -> WidgetSettings:
        with self._lock:
            self._write(SETTINGS_FILE, widget_settings.model_dump(mode="json"))
        return widget_settings

    # -- products --------------------------------------------------------

    def get_products(self) -> List[Product]:
        stored = self._read(PRODUCTS_FILE)
        if stored is None:
            # First read seeds the demo catalogue
            products = [Product(**p) for p in DEFAULT_PRODUCTS]
            self.save_products(products)
            return products
        try:
            return [Product(**p) for p in stored]
        except (TypeError, ValueError):
            return [Product(**p) for p in DEFAULT_PRODUCTS]

    def save_products(self, products: List[Product]) -> List[Product]:
        with self._lock:
            self._write(PRODUCTS_FILE, [p.model_dump(mode="json") for p in products])
        return products

    def update_product(self, product_id: str, updates: Dict[str, Any]) -> Optional[Product]:
        products = self.get_products()
        for i, product in enumerate(products):
            if product.id == product_id:
                products[i] = Product(**{**product.model_dump(), **updates})
                self.save_products(products)
                return products[i]
        return None

    # -- recent try-on results ------------------------------------------
    # Stored as {session_id: [newest, ..., oldest]}; a session only ever sees its own list.

    def _fresh(self, entries: Any, cutoff: int) -> List[Dict[str, Any]]:
        if not isinstance(entries, list):
            return []
        return [r for r in entries if isinstance(r, dict) and r.get("timestamp", 0) > cutoff]

    def _read_sessions(self) -> Dict[str, Any]:
        stored = self._read(RESULTS_FILE)
        return stored if isinstance(stored, dict) else {}

    def get_cached_results(self, session_id: str) -> List[Dict[str, Any]]:
        cutoff = self.clock() - self.result_ttl_ms
        return self._fresh(self._read_sessions().get(session_id), cutoff)

    def save_cached_result(self, session_id: str, result: Dict[str, Any]) -> Dict[str, Any]:
        now = self.clock()
        entry = {**result, "timestamp": now}
        cutoff = now - self.result_ttl_ms
        with self._lock:
            sessions = {}
            # Expired entries and emptied sessions are dropped on every write
            for sid, entries in self._read_sessions().items():
                fresh = self._fresh(entries, cutoff)
                if fresh:
                    sessions[sid] = fresh
            cached = [entry] + sessions.get(session_id, [])
            sessions[session_id] = cached[: self.result_limit]
            if not sessions[session_id]:
                del sessions[session_id]
            self._write(RESULTS_FILE, sessions)
        return entry

    def clear_cache(self, session_id: str) -> None:
        with self._lock:
            sessions = self._read_sessions()
            if sessions.pop(session_id, None) is not None:
                self._write(RESULTS_FILE, sessions)


_store: Optional[WidgetStore] = None


def get_store() -> WidgetStore:
    global _store
    if _store is None:
        _store = WidgetStore()
    return _store
