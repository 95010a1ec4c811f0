"""
Analysis Store

In-memory registry of analysis results and their derived aggregates.
Results are held only for the lifetime of the process; the oldest analysis
is evicted once the configured capacity is reached.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, List, Optional

from ..core.config import settings
from .dataset_profiler import AnalysisResult

logger = logging.getLogger("tablescope.analysis_store")


class _Entry:
    __slots__ = ("result", "created_at", "derived")

    def __init__(self, result: AnalysisResult):
        self.result = result
        self.created_at = datetime.now(timezone.utc).isoformat()
        self.derived: Dict[Hashable, Any] = {}


class AnalysisStore:
    """
    Thread-safe store of AnalysisResult objects keyed by analysis id.
    Derived aggregates are memoized per (kind, parameters) key.
    """

    def __init__(self, max_entries: int = None):
        if max_entries is None:
            max_entries = settings.ANALYSIS_CACHE_SIZE
        self.max_entries = max(1, max_entries)
        self._lock = threading.RLock()
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()

    def save(self, result: AnalysisResult) -> str:
        """Store a result and return its new analysis id."""
        analysis_id = uuid.uuid4().hex
        with self._lock:
            self._entries[analysis_id] = _Entry(result)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.info("Evicted analysis %s (capacity %d)", evicted, self.max_entries)
        return analysis_id

    def get(self, analysis_id: str) -> Optional[AnalysisResult]:
        with self._lock:
            entry = self._entries.get(analysis_id)
            return entry.result if entry else None

    def created_at(self, analysis_id: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(analysis_id)
            return entry.created_at if entry else None

    def list_ids(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def delete(self, analysis_id: str) -> bool:
        with self._lock:
            return self._entries.pop(analysis_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def derived(
        self,
        analysis_id: str,
        key: Hashable,
        factory: Callable[[AnalysisResult], Any],
    ) -> Any:
        """
        Return the cached aggregate for `key`, computing it with `factory` on
        first use. Returns None if the analysis does not exist.

        The factory runs outside the lock; two concurrent first requests may
        both compute, and the first stored value wins.
        """
        with self._lock:
            entry = self._entries.get(analysis_id)
            if entry is None:
                return None
            if key in entry.derived:
                return entry.derived[key]
            result = entry.result

        value = factory(result)
        with self._lock:
            return entry.derived.setdefault(key, value)


# Global store instance
analysis_store = AnalysisStore()
