
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.optimize import linear_sum_assignment

from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.jaccard import SimilarityMatrix
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Match:
    reference: Hashable
    candidate: Optional[Hashable]
    similarity: float


class MatchSet(Mapping):
    """
    Read-only mapping {reference label: Match}, one entry per reference cluster,
    in the row order of the similarity matrix it was built from.
    """

    def __init__(self, matches: List[Match], reference_name: str = 'GT', candidate_name: str = 'candidate'):
        self._matches: Tuple[Match, ...] = tuple(matches)
        self._by_label: Dict[Hashable, Match] = {m.reference: m for m in self._matches}
        if len(self._by_label) != len(self._matches):
            raise InvalidInput("Duplicate reference label in match set.")
        self.reference_name = reference_name
        self.candidate_name = candidate_name

    def __getitem__(self, label: Hashable) -> Match:
        return self._by_label[label]

    def __iter__(self) -> Iterator[Hashable]:
        return (m.reference for m in self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    def matches(self) -> Tuple[Match, ...]:
        return self._matches

    def candidate_usage(self) -> Dict[Hashable, int]:
        """How many reference clusters were matched to each candidate cluster."""
        usage: Dict[Hashable, int] = {}
        for m in self._matches:
            if m.candidate is not None:
                usage[m.candidate] = usage.get(m.candidate, 0) + 1
        return usage

    def names(self) -> List[str]:
        lines = []
        for m in self._matches:
            target = f"{self.candidate_name}.{m.candidate}" if m.candidate is not None else "(unmatched)"
            lines.append(f"{self.reference_name}.{m.reference} -> {target} ({m.similarity:.4f})")
        return lines

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                'candidate': [
                    f"{self.candidate_name}.{m.candidate}" if m.candidate is not None else None
                    for m in self._matches
                ],
                'similarity': [m.similarity for m in self._matches],
            },
            index=[f"{self.reference_name}.{m.reference}" for m in self._matches],
        )

    def __str__(self) -> str:
        return "\n".join(self.names())

    def __repr__(self) -> str:
        return f"MatchSet({list(self._matches)!r})"


def _check_matrix(matrix: SimilarityMatrix):
    n_rows, n_cols = matrix.shape
    if n_rows == 0 or n_cols == 0:
        raise InvalidInput(f"Similarity matrix is empty: shape ({n_rows}, {n_cols}).")


def greedy_row_match(matrix: SimilarityMatrix) -> MatchSet:
    """
    Matches every reference cluster to its most similar candidate cluster.

    Ties go to the first maximal column. Matching is per row, not one-to-one:
    several reference clusters may share one candidate cluster.
    """
    _check_matrix(matrix)

    # np.argmax returns the first occurrence of the maximum
    best_cols = np.argmax(matrix.values, axis=1)
    matches = [
        Match(
            reference=ref_label,
            candidate=matrix.col_labels[j],
            similarity=float(matrix.values[i, j]),
        )
        for i, (ref_label, j) in enumerate(zip(matrix.row_labels, best_cols))
    ]
    return MatchSet(matches, matrix.row_name, matrix.col_name)


def bipartite_optimal_match(matrix: SimilarityMatrix) -> MatchSet:
    """
    One-to-one assignment maximizing the summed similarity (Hungarian method).

    Opt-in alternative to greedy_row_match. With more reference than candidate
    clusters, the leftover reference clusters are reported with candidate None
    and similarity 0.0 so that every reference cluster keeps one entry.
    """
    _check_matrix(matrix)

    rows, cols = linear_sum_assignment(matrix.values, maximize=True)
    assigned = dict(zip(rows.tolist(), cols.tolist()))

    matches = []
    for i, ref_label in enumerate(matrix.row_labels):
        if i in assigned:
            j = assigned[i]
            matches.append(Match(ref_label, matrix.col_labels[j], float(matrix.values[i, j])))
        else:
            matches.append(Match(ref_label, None, 0.0))

    n_unmatched = len(matrix.row_labels) - len(assigned)
    if n_unmatched:
        logger.debug(f"Bipartite matching left {n_unmatched} reference clusters unmatched")
    return MatchSet(matches, matrix.row_name, matrix.col_name)


MATCHERS: Dict[str, Callable[[SimilarityMatrix], MatchSet]] = {
    'greedy': greedy_row_match,
    'bipartite': bipartite_optimal_match,
}


def match_clusters(matrix: SimilarityMatrix, method: str = 'greedy') -> MatchSet:
    if method not in MATCHERS:
        raise InvalidInput(f"Unknown matching method '{method}', expected one of {list(MATCHERS)}.")
    return MATCHERS[method](matrix)
