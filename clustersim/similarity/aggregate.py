
from functools import reduce
from typing import Dict, Hashable, Sequence, Tuple

import pandas as pd

from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.matching import Match, MatchSet
from clustersim.similarity.partition import as_labels, cluster_sizes
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)


def pair_weight(
    match: Match,
    ref_sizes: Dict[Hashable, int],
    n_ref: int,
    cand_sizes: Dict[Hashable, int],
    n_cand: int
) -> float:
    """
    Combined size fraction of a matched pair: size(g)/N_ref + size(c)/N_cand.
    A None candidate (reference cluster left unmatched) contributes size 0.
    """
    if match.reference not in ref_sizes:
        raise InvalidInput(f"Reference cluster {match.reference!r} does not occur in the reference partition.")
    if match.candidate is not None and match.candidate not in cand_sizes:
        raise InvalidInput(f"Candidate cluster {match.candidate!r} does not occur in the candidate partition.")

    cand_size = cand_sizes[match.candidate] if match.candidate is not None else 0
    return ref_sizes[match.reference] / n_ref + cand_size / n_cand


def _weights(match_set: MatchSet, reference: Sequence[Hashable], candidate: Sequence[Hashable]):
    if len(match_set) == 0:
        raise InvalidInput("Match set is empty: the weighted mean is undefined.")

    ref_labels = as_labels(reference)
    cand_labels = as_labels(candidate)
    if len(ref_labels) != len(cand_labels):
        raise InvalidInput(
            f"Partitions differ in node count: reference={len(ref_labels)}, candidate={len(cand_labels)}"
        )
    ref_sizes = cluster_sizes(ref_labels)
    cand_sizes = cluster_sizes(cand_labels)

    return [
        (m, pair_weight(m, ref_sizes, len(ref_labels), cand_sizes, len(cand_labels)))
        for m in match_set.matches()
    ]


def weighted_similarity(match_set: MatchSet, reference: Sequence[Hashable], candidate: Sequence[Hashable]) -> float:
    """
    Global similarity: mean of the matched similarities weighted by cluster size.

        score = sum(w_i * s_i) / sum(w_i),  w_i = size(g_i)/N_ref + size(c_i)/N_cand

    A candidate cluster matched by several reference clusters contributes its
    size to each of those pairs.
    """
    def step(acc: Tuple[float, float], item: Tuple[Match, float]) -> Tuple[float, float]:
        match, weight = item
        return acc[0] + weight * match.similarity, acc[1] + weight

    weighted_sum, weight_sum = reduce(step, _weights(match_set, reference, candidate), (0.0, 0.0))

    if weight_sum <= 0:
        raise InvalidInput("Total match weight is zero: the weighted mean is undefined.")

    score = weighted_sum / weight_sum
    logger.debug(f"Weighted similarity over {len(match_set)} pairs: {score:.4f}")
    return score


def match_weights(match_set: MatchSet, reference: Sequence[Hashable], candidate: Sequence[Hashable]) -> pd.DataFrame:
    """Per-pair weights and weighted contributions, one row per reference cluster."""
    frame = match_set.to_frame()
    frame['weight'] = [w for _, w in _weights(match_set, reference, candidate)]
    frame['contribution'] = frame['weight'] * frame['similarity']
    return frame
