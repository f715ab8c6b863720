"""FuzzyMatcher: two-stage fuzzy lookup over an in-memory corpus.

A query is normalized and fingerprinted, compared against fingerprints of
similar-length corpus strings with an adaptive tolerance, and the survivors
are rescored with Jaro-Winkler against the raw query.

Warning:
    FuzzyMatcher is NOT thread-safe: the query cache reorders entries on
    every lookup and dynamic mode indexes candidates during ``search``. Use
    ThreadSafeFuzzyMatcher, or one instance per thread, for concurrent use.
"""

import logging
import math
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import polars as pl

from quickfuzzy._utils import round_half_up
from quickfuzzy.cache import LRUCache
from quickfuzzy.exceptions import ValidationError
from quickfuzzy.index import BucketIndex, length_tolerance
from quickfuzzy.jaro import jaro_winkler_similarity
from quickfuzzy.nilsimsa import compare_raw, fingerprint
from quickfuzzy.normalization import create_normalizer
from quickfuzzy.options import Options

logger = logging.getLogger(__name__)

SHORT_QUERY_LENGTH = 3
GOOD_ENOUGH_SCORE = 0.98


def min_score_for(length: int) -> float:
    """Acceptance threshold for a query of ``length`` characters."""
    if length <= 4:
        return 0.9
    if length <= 8:
        return 0.85
    return 0.8


def hash_tolerance(normalized: str, options: Options) -> int:
    """
    Adaptive fingerprint score tolerance for a normalized query.

    Short and repetitive queries get a wider band, since a fixed number of
    differing bits says less about them than about long, varied ones.
    """
    length = len(normalized)
    unique_ratio = len(set(normalized)) / length if length else 1.0
    raw = (
        options.hash_base_tolerance
        - math.log2(length + 1) * options.hash_length_penalty
        + (1 - unique_ratio) * options.hash_entropy_boost
    )
    return max(options.hash_min_tolerance, round_half_up(raw))


def select_within_tolerance(scored: Sequence[Tuple[str, int]], tolerance: float) -> List[str]:
    """Keep every candidate whose score is within ``tolerance`` of the best.

    The result is the same set whatever order ``scored`` comes in; survivors
    keep their input order.
    """
    if not scored:
        return []
    best = max(score for _, score in scored)
    return [text for text, score in scored if best - score <= tolerance]


def rank_candidates(query: str, candidates: Iterable[str]) -> Tuple[List[str], float]:
    """
    Rescore candidates with Jaro-Winkler against ``query``.

    Returns:
        Tuple of (best candidates, best score). Every candidate tied with the
        best score is kept; a score of 0.98 or more ends the scan with that
        candidate alone. The score is -inf when there are no candidates.
    """
    best_score = -math.inf
    best: List[str] = []
    for candidate in candidates:
        score = jaro_winkler_similarity(candidate, query)
        if score >= GOOD_ENOUGH_SCORE:
            return [candidate], score
        if score > best_score:
            best_score = score
            best = [candidate]
        elif score == best_score:
            best.append(candidate)
    return best, best_score


class FuzzyMatcher:
    """
    Typo-tolerant lookup of short strings in a corpus.

    Warning:
        This class is NOT thread-safe. Use ThreadSafeFuzzyMatcher or separate
        instances when searching from several threads.

    Example:
        >>> from quickfuzzy import FuzzyMatcher
        >>>
        >>> matcher = FuzzyMatcher(["Kyivska", "Lvivska", "Odeska"], mode="static")
        >>> matcher.search("Kyivska")
        ['Kyivska']
        >>> matcher.search("Lvivsca")
        ['Lvivska']
    """

    def __init__(
        self,
        data: Optional[Iterable[str]] = None,
        options: Optional[Options] = None,
        *,
        hash_map: Optional[Mapping[str, Union[bytes, str]]] = None,
        **overrides: Any,
    ):
        """
        Create a matcher.

        Args:
            data: Initial corpus strings.
            options: Full Options record. Keyword overrides are applied on top.
            hash_map: Prebuilt ``{text: fingerprint}`` mapping (raw bytes or hex),
                fingerprinted with the same normalization settings.
            **overrides: Individual Options fields, e.g. ``mode="static"``.

        Raises:
            ValidationError: On invalid options, or static mode without data
                or hash_map.
        """
        if options is None:
            options = Options.create(**overrides)
        elif overrides:
            options = options.replace(**overrides)

        if options.is_static and data is None and hash_map is None:
            raise ValidationError("Static mode requires initial data or a hash_map")

        self._options = options
        self._normalize = create_normalizer(options)
        self._query_cache: LRUCache[str, bytes] = LRUCache(options.max_query_cache)

        if hash_map is not None:
            self._index = BucketIndex.from_hash_map(hash_map)
        else:
            self._index = BucketIndex()

        if data is not None:
            self.set_data(data)

        logger.debug("Created %r", self)

    @classmethod
    def from_series(cls, series: "pl.Series", **kwargs: Any) -> "FuzzyMatcher":
        """
        Create a matcher from a Polars Series.

        Null values are skipped.

        Example:
            >>> names = pl.Series(["Apple", "Microsoft", "Google"])
            >>> matcher = FuzzyMatcher.from_series(names, mode="static")
        """
        items = [str(x) for x in series.to_list() if x is not None]
        return cls(items, **kwargs)

    @classmethod
    def from_dataframe(cls, df: "pl.DataFrame", column: str, **kwargs: Any) -> "FuzzyMatcher":
        """Create a matcher from a DataFrame column."""
        return cls.from_series(df[column], **kwargs)

    @property
    def options(self) -> Options:
        return self._options

    def compute_fingerprint(self, text: str) -> bytes:
        """Fingerprint ``text`` with this matcher's normalization."""
        return fingerprint(self._normalize(text))

    def set_data(self, strings: Iterable[str]) -> None:
        """
        Bulk-load strings into the index.

        Strings already present get their fingerprint recomputed and
        overwritten, so loading a string twice leaves one entry.
        """
        count = 0
        for text in strings:
            if not isinstance(text, str):
                raise TypeError(f"data items must be str, got {type(text).__name__}")
            self._index.insert(text, self.compute_fingerprint(text))
            count += 1
        logger.debug("Indexed %d strings (%d total)", count, len(self._index))

    def search(self, query: str, candidates: Optional[Sequence[str]] = None) -> Optional[List[str]]:
        """
        Find the corpus strings most similar to ``query``.

        Args:
            query: String to look up.
            candidates: Optional explicit candidate list searched instead of
                the indexed corpus.

        Returns:
            Non-empty list of the best matching strings (all strings tied for
            the best score), or None when nothing is close enough.

        Raises:
            TypeError: If query is not a string.
        """
        if not isinstance(query, str):
            raise TypeError(f"query must be str, got {type(query).__name__}")

        if candidates is not None:
            if query in candidates:
                return [query]
        elif query in self._index:
            return [query]

        normalized = self._normalize(query)

        if len(normalized) <= SHORT_QUERY_LENGTH:
            pool: Iterable[str] = candidates if candidates is not None else list(self._index)
        else:
            pool = self._filter_by_hash(query, normalized, candidates)
            if len(pool) == 1:
                return pool

        match, score = rank_candidates(query, pool)
        if score < min_score_for(len(query)):
            return None
        return match

    def _query_fingerprint(self, normalized: str) -> bytes:
        fp = self._query_cache.get(normalized)
        if fp is None:
            fp = fingerprint(normalized)
            self._query_cache.set(normalized, fp)
        return fp

    def _candidate_fingerprints(self, query: str, candidates: Optional[Sequence[str]]) -> Iterable[Tuple[str, bytes]]:
        length = len(query)
        ratio = self._options.string_length_tolerance
        if candidates is None:
            return self._index.candidates_near(length, ratio)

        tol = length_tolerance(length, ratio)
        pairs = []
        for text in candidates:
            if abs(length - len(text)) > tol:
                continue
            if self._options.is_static:
                fp = self._index.get(text)
                if fp is None:
                    continue
            else:
                fp = self._index.get_or_insert(text, self.compute_fingerprint)
            pairs.append((text, fp))
        return pairs

    def _filter_by_hash(self, query: str, normalized: str, candidates: Optional[Sequence[str]]) -> List[str]:
        source = self._query_fingerprint(normalized)
        tolerance = hash_tolerance(normalized, self._options)
        scored = [
            (text, compare_raw(source, fp))
            for text, fp in self._candidate_fingerprints(query, candidates)
        ]
        return select_within_tolerance(scored, tolerance)

    def search_series(
        self,
        queries: "pl.Series",
        include_query: bool = True,
    ) -> "pl.DataFrame":
        """
        Search for each query in a Series, returning a DataFrame of matches.

        Args:
            queries: Series of query strings
            include_query: Include query column in results

        Returns:
            DataFrame with columns:
            - query_idx: Index of the query in the input Series
            - query: The query string (if include_query=True)
            - match: A matched corpus string (one row per tied match)

            Queries without a match produce no rows.
        """
        rows = []
        for query_idx, query in enumerate(queries.to_list()):
            if query is None:
                continue

            matches = self.search(str(query))
            for match in matches or []:
                row = {"query_idx": query_idx, "match": match}
                if include_query:
                    row["query"] = str(query)
                rows.append(row)

        if not rows:
            schema = {"query_idx": pl.Int64, "match": pl.Utf8}
            if include_query:
                schema = {"query_idx": pl.Int64, "query": pl.Utf8, "match": pl.Utf8}
            return pl.DataFrame(schema=schema)

        df = pl.DataFrame(rows)
        if include_query:
            return df.select(["query_idx", "query", "match"])
        return df.select(["query_idx", "match"])

    def batch_search(self, queries: Iterable[str]) -> List[Optional[List[str]]]:
        """Search for multiple queries, returning one result per query."""
        return [self.search(q) for q in queries]

    def cache_info(self) -> Dict[str, int]:
        """Return query cache counters plus the index size."""
        info = self._query_cache.info()
        info["indexed"] = len(self._index)
        return info

    def clear_cache(self) -> None:
        self._query_cache.clear()

    def get_items(self) -> List[str]:
        """Return the indexed strings in bucket order."""
        return list(self._index)

    def __contains__(self, text: object) -> bool:
        return text in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mode={self._options.mode.value!r}, size={len(self._index)})"


class ThreadSafeFuzzyMatcher(FuzzyMatcher):
    """
    FuzzyMatcher guarded by a single re-entrant lock.

    Thread-safe: every call that touches the index or the query cache,
    including ``search`` (cache recency, dynamic-mode inserts), runs under
    the lock.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        self._lock = threading.RLock()
        super().__init__(*args, **kwargs)

    def set_data(self, strings: Iterable[str]) -> None:
        with self._lock:
            super().set_data(strings)

    def search(self, query: str, candidates: Optional[Sequence[str]] = None) -> Optional[List[str]]:
        with self._lock:
            return super().search(query, candidates)

    def cache_info(self) -> Dict[str, int]:
        with self._lock:
            return super().cache_info()

    def clear_cache(self) -> None:
        with self._lock:
            super().clear_cache()

    def get_items(self) -> List[str]:
        with self._lock:
            return super().get_items()

    def __contains__(self, text: object) -> bool:
        with self._lock:
            return super().__contains__(text)

    def __len__(self) -> int:
        with self._lock:
            return super().__len__()


__all__ = [
    "FuzzyMatcher",
    "ThreadSafeFuzzyMatcher",
    "hash_tolerance",
    "min_score_for",
    "rank_candidates",
    "select_within_tolerance",
]
