
from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Hashable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.partition import as_labels, index_partition, ordered_labels
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SimilarityMatrix:
    """
    Jaccard similarity between every (reference cluster, candidate cluster) pair.

    Rows follow `row_labels` and columns follow `col_labels`; both keep the
    original partition labels. `row_name` / `col_name` are only used to build
    readable identifiers such as "GT.3" or "louvain.0".
    """
    values: np.ndarray
    row_labels: Tuple[Hashable, ...]
    col_labels: Tuple[Hashable, ...]
    row_name: str = 'GT'
    col_name: str = 'candidate'

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    def row_ids(self) -> List[str]:
        return [f"{self.row_name}.{label}" for label in self.row_labels]

    def col_ids(self) -> List[str]:
        return [f"{self.col_name}.{label}" for label in self.col_labels]

    def value(self, row_label: Hashable, col_label: Hashable) -> float:
        i = self.row_labels.index(row_label)
        j = self.col_labels.index(col_label)
        return float(self.values[i, j])

    def transpose(self) -> 'SimilarityMatrix':
        return SimilarityMatrix(
            values=self.values.T.copy(),
            row_labels=self.col_labels,
            col_labels=self.row_labels,
            row_name=self.col_name,
            col_name=self.row_name,
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.values, index=self.row_ids(), columns=self.col_ids())

    def __str__(self) -> str:
        return self.to_frame().round(4).to_string()


def jaccard(a: AbstractSet, b: AbstractSet) -> float:
    """|a & b| / |a | b|, defined as 0.0 when both sets are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def _label_codes(index: Dict[Hashable, FrozenSet[int]], labels: List[Hashable], n_nodes: int) -> np.ndarray:
    codes = np.empty(n_nodes, dtype=np.int64)
    for pos, label in enumerate(labels):
        codes[list(index[label])] = pos
    return codes


def jaccard_matrix(
    reference: Sequence[Hashable],
    candidate: Sequence[Hashable],
    reference_name: str = 'GT',
    candidate_name: str = 'candidate',
    order: str = 'sorted'
) -> SimilarityMatrix:
    """
    Computes the full Jaccard similarity table between two partitions of the same nodes.

    Node sets are indexed once; intersections come from a contingency table
    built in a single pass over the nodes, unions from the cluster sizes.

    Args:
        reference: Reference (ground-truth) partition, one label per node.
        candidate: Candidate partition over the same nodes, in the same order.
        reference_name: Prefix for row identifiers.
        candidate_name: Prefix for column identifiers.
        order: 'sorted' (default) or 'first_seen' row/column ordering.

    Returns:
        SimilarityMatrix with rows = reference clusters, columns = candidate clusters.
    """
    ref_labels = as_labels(reference)
    cand_labels = as_labels(candidate)
    if len(ref_labels) != len(cand_labels):
        raise InvalidInput(
            f"Partitions differ in node count: {reference_name}={len(ref_labels)}, "
            f"{candidate_name}={len(cand_labels)}"
        )
    n_nodes = len(ref_labels)

    ref_index = index_partition(ref_labels)
    cand_index = index_partition(cand_labels)
    rows = ordered_labels(ref_index, order)
    cols = ordered_labels(cand_index, order)

    ref_codes = _label_codes(ref_index, rows, n_nodes)
    cand_codes = _label_codes(cand_index, cols, n_nodes)

    intersection = np.zeros((len(rows), len(cols)), dtype=np.int64)
    np.add.at(intersection, (ref_codes, cand_codes), 1)

    ref_sizes = np.array([len(ref_index[label]) for label in rows], dtype=np.int64)
    cand_sizes = np.array([len(cand_index[label]) for label in cols], dtype=np.int64)
    union = ref_sizes[:, None] + cand_sizes[None, :] - intersection

    values = np.divide(
        intersection, union,
        out=np.zeros(intersection.shape, dtype=float),
        where=union > 0
    )

    logger.debug(f"Jaccard matrix {reference_name} x {candidate_name}: {values.shape[0]} x {values.shape[1]}")
    return SimilarityMatrix(
        values=values,
        row_labels=tuple(rows),
        col_labels=tuple(cols),
        row_name=reference_name,
        col_name=candidate_name,
    )
