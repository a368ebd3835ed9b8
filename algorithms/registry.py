"""
registry.py — Algorithm Registry
=================================
An id-keyed store of AlgorithmAdapters.  Registration order is display
order.

Design decisions:
  - `register` never raises and never overwrites: a duplicate id is logged
    and skipped, so the first registration wins.
  - Everything else is a pure read.  `clear()` exists for tests only.
"""

import logging
from typing import Dict, List, Optional

from algorithms.adapter import GENERIC_FAILURE, AlgorithmAdapter, AlgorithmType

logger = logging.getLogger(__name__)


class AlgorithmRegistry:

    def __init__(self):
        self._algorithms: Dict[str, AlgorithmAdapter] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, adapter: AlgorithmAdapter) -> None:
        algo_id = adapter.metadata.id
        if algo_id in self._algorithms:
            logger.warning("Algorithm %r is already registered. Skipping.", algo_id)
            return
        self._algorithms[algo_id] = adapter
        logger.debug("Registered algorithm %r", algo_id)

    def clear(self) -> None:
        self._algorithms.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get(self, algo_id: str) -> Optional[AlgorithmAdapter]:
        return self._algorithms.get(algo_id)

    def get_by_type(self, algo_type: AlgorithmType) -> List[AlgorithmAdapter]:
        return [a for a in self._algorithms.values() if a.metadata.type is algo_type]

    def get_all(self) -> List[AlgorithmAdapter]:
        return list(self._algorithms.values())

    def has(self, algo_id: str) -> bool:
        return algo_id in self._algorithms

    @property
    def size(self) -> int:
        return len(self._algorithms)

    def __len__(self) -> int:
        return len(self._algorithms)

    def __contains__(self, algo_id: str) -> bool:
        return algo_id in self._algorithms

    # ------------------------------------------------------------------
    # UI helpers
    # ------------------------------------------------------------------
    def get_dropdown_options(self) -> List[dict]:
        """
        A disabled placeholder first, then one entry per algorithm:
            {"key": "bfs", "text": "BFS", "data": "traversal"}
        """
        options: List[dict] = [{"key": "select", "text": "Select Algorithm", "disabled": True}]
        for adapter in self._algorithms.values():
            meta = adapter.metadata
            options.append({"key": meta.id, "text": meta.name, "data": meta.type.value})
        return options

    def get_description(self, algo_id: str) -> Optional[str]:
        adapter = self.get(algo_id)
        if adapter is None:
            return None
        return adapter.metadata.description or None

    def get_failure_message(self, algo_id: str) -> str:
        adapter = self.get(algo_id)
        if adapter is not None and adapter.metadata.failure_message:
            return adapter.metadata.failure_message
        return GENERIC_FAILURE

    def __repr__(self) -> str:
        return f"AlgorithmRegistry({list(self._algorithms)})"
