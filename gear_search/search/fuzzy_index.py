"""
Fuzzy text index over a catalog snapshot.

Approximate, weighted, multi-field matching. A field is scored by the edit
errors needed to find the query in it, as a fraction of the query length,
plus a penalty for how far from the start of the field the match sits.
0 is a perfect match at the start of the field; a field matches when its
score is within the configured threshold. Scores combine multiplicatively,
so items matching several fields rank ahead of items matching one.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein

from gear_search.config import FuzzyConfig
from gear_search.models import CatalogItem

logger = logging.getLogger(__name__)

# Floor for perfect field scores so they still take part in the product
EPSILON = sys.float_info.epsilon


@dataclass
class FuzzyMatch:
    """A candidate item and its relevance score (lower is better)"""
    item: CatalogItem
    score: float


class FuzzyIndex:
    """
    Immutable fuzzy index built from a list of catalog items.

    Attributes:
        config: Matching configuration
        size: Number of indexed items
    """

    def __init__(self, items: Iterable[CatalogItem], config: Optional[FuzzyConfig] = None):
        self.config = config or FuzzyConfig()

        total_weight = sum(self.config.field_weights.values())
        self._weights: Dict[str, float] = {
            name: weight / total_weight
            for name, weight in self.config.field_weights.items()
        }

        # Lowercased searchable text, computed once per build
        self._records: List[Tuple[CatalogItem, Dict[str, str]]] = []
        for item in items:
            fields = {}
            for name in self._weights:
                value = getattr(item, name, None)
                if value:
                    fields[name] = str(value).lower()
            self._records.append((item, fields))

    @classmethod
    def build(cls, items: Iterable[CatalogItem], config: Optional[FuzzyConfig] = None) -> 'FuzzyIndex':
        return cls(items, config)

    @property
    def size(self) -> int:
        return len(self._records)

    def search(self, text: str) -> List[FuzzyMatch]:
        """
        Find items whose text resembles the query.

        CPU bound; callers on an event loop should run it in a worker thread.

        Args:
            text: Free-text query

        Returns:
            Matches sorted by ascending score; ties keep snapshot order
        """
        pattern = (text or "").strip().lower()
        if len(pattern) < self.config.min_match_char_length:
            return []

        matches: List[FuzzyMatch] = []
        for item, fields in self._records:
            score = self._score_item(pattern, fields)
            if score is not None:
                matches.append(FuzzyMatch(item=item, score=score))

        matches.sort(key=lambda match: match.score)
        return matches

    def _score_item(self, pattern: str, fields: Dict[str, str]) -> Optional[float]:
        total = 1.0
        matched = False

        for name, value in fields.items():
            field_score = self._score_field(pattern, value)
            if field_score is None:
                continue
            matched = True
            total *= max(field_score, EPSILON) ** self._weights[name]

        return total if matched else None

    def _score_field(self, pattern: str, value: str) -> Optional[float]:
        """
        Score one field against the pattern.

        An exact occurrence scores by its offset alone. Otherwise the best
        aligned substring near the start of the field is located and scored
        as (edit errors / pattern length) + (offset / distance).

        Returns:
            Field score, or None if the field does not match
        """
        threshold = self.config.threshold
        distance = self.config.distance

        position = value.find(pattern)
        if position != -1:
            score = position / distance
            if score <= threshold:
                return score

        length = len(pattern)
        max_errors = int(threshold * length)
        if max_errors == 0:
            return None

        # A match starting past max_offset is penalised beyond the threshold
        max_offset = int(threshold * distance)
        head = value[:max_offset + length + max_errors]

        alignment = fuzz.partial_ratio_alignment(pattern, head)
        if alignment is None:
            return None

        window = head[alignment.dest_start:alignment.dest_end]
        errors = Levenshtein.distance(pattern, window, score_cutoff=max_errors)
        if errors > max_errors:
            return None

        score = errors / length + alignment.dest_start / distance
        return score if score <= threshold else None
