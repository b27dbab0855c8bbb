import hashlib
import logging
from datetime import datetime
from typing import Any, Dict, List

import pytz

from utils.constants import SUGGESTION_ID_LENGTH, SUGGESTION_ID_PREFIX

logger = logging.getLogger(__name__)


def canonical_instant(moment: datetime) -> str:
    """UTC ISO-8601 representation with a trailing Z."""
    return moment.astimezone(pytz.UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def suggestion_id(session_type: str, start: datetime, end: datetime) -> str:
    """
    Stable identifier for a suggested slot.

    The same (type, start, end) always maps to the same identifier, so
    clients can use it as a cache key or idempotency token.
    """
    canonical = f"{session_type}|{canonical_instant(start)}|{canonical_instant(end)}"
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{SUGGESTION_ID_PREFIX}{digest[:SUGGESTION_ID_LENGTH]}"


class SuggestionPaginator:
    """Ranks, deduplicates and slices scored candidates."""

    def rank(self, candidates: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Sort candidates by (score desc, start asc, end asc) and drop duplicates.

        Args:
            candidates: Dicts with 'id', 'start_time', 'end_time' and 'score'

        Returns:
            Ranked candidates, unique by id
        """
        ordered = sorted(
            candidates,
            key=lambda c: (-c["score"], c["start_time"], c["end_time"]),
        )

        seen = set()
        ranked = []
        for candidate in ordered:
            if candidate["id"] in seen:
                continue
            seen.add(candidate["id"])
            ranked.append(candidate)
        return ranked

    def paginate(
        self, candidates: List[Dict[str, Any]], offset: int, limit: int
    ) -> Dict[str, Any]:
        """
        Return one page of ranked candidates.

        Returns:
            Dict with 'results', 'count' (total ranked candidates) and 'has_more'
        """
        ranked = self.rank(candidates)
        total = len(ranked)
        page = ranked[offset : offset + limit]

        logger.debug(f"Paginated {total} suggestions: offset={offset} limit={limit}")
        return {
            "results": page,
            "count": total,
            "has_more": offset + limit < total,
        }
