
from dataclasses import dataclass
from typing import Hashable, Mapping, Optional, Sequence

import pandas as pd
from sklearn.metrics import adjusted_rand_score, normalized_mutual_info_score
from tqdm.auto import tqdm

from clustersim.similarity.aggregate import match_weights, weighted_similarity
from clustersim.similarity.config import similarity_params
from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.jaccard import SimilarityMatrix, jaccard_matrix
from clustersim.similarity.matching import MatchSet, match_clusters
from clustersim.similarity.partition import as_labels
from clustersim.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    matrix: SimilarityMatrix
    matches: MatchSet
    score: float
    reference_name: str
    candidate_name: str
    method: str


def compare_partitions(
    reference: Sequence[Hashable],
    candidate: Sequence[Hashable],
    reference_name: str = similarity_params['reference_name'],
    candidate_name: str = 'candidate',
    method: str = similarity_params['method'],
    order: str = similarity_params['order']
) -> ComparisonResult:
    """
    Runs the full pipeline: Jaccard matrix -> cluster matching -> weighted global score.
    """
    matrix = jaccard_matrix(reference, candidate, reference_name, candidate_name, order=order)
    matches = match_clusters(matrix, method=method)
    score = weighted_similarity(matches, reference, candidate)

    logger.debug(f"{reference_name} vs {candidate_name} [{method}]: score={score:.4f}")
    return ComparisonResult(
        matrix=matrix,
        matches=matches,
        score=score,
        reference_name=reference_name,
        candidate_name=candidate_name,
        method=method,
    )


def rank_candidates(
    reference: Sequence[Hashable],
    candidates: Mapping[str, Sequence[Hashable]],
    reference_name: str = similarity_params['reference_name'],
    method: str = similarity_params['method'],
    order: str = similarity_params['order'],
    with_external: bool = similarity_params['with_external'],
    verbose: bool = False
) -> pd.DataFrame:
    """
    Scores every candidate partition against the reference.

    Returns:
        DataFrame indexed by candidate name, sorted by descending score, with
        columns score, n_clusters and (optionally) nmi / ari.
    """
    if not candidates:
        raise InvalidInput("No candidate partitions to rank.")

    ref_labels = as_labels(reference)
    records = []
    for name, candidate in tqdm(candidates.items(), desc="Ranking", disable=not verbose):
        cand_labels = as_labels(candidate)
        result = compare_partitions(ref_labels, cand_labels, reference_name, name, method=method, order=order)
        record = {
            'candidate': name,
            'score': result.score,
            'n_clusters': result.matrix.shape[1],
        }
        if with_external:
            record['nmi'] = normalized_mutual_info_score(ref_labels, cand_labels)
            record['ari'] = adjusted_rand_score(ref_labels, cand_labels)
        records.append(record)

    ranking = pd.DataFrame.from_records(records).set_index('candidate')
    # stable sort keeps insertion order among equal scores
    return ranking.sort_values('score', ascending=False, kind='mergesort')


def best_candidate(ranking: pd.DataFrame) -> str:
    if ranking.empty:
        raise InvalidInput("Ranking is empty.")
    return str(ranking.index[0])


def format_report(result: ComparisonResult, reference: Optional[Sequence[Hashable]] = None, candidate: Optional[Sequence[Hashable]] = None) -> str:
    """Human-readable report: similarity table, matched pairs and global score."""
    sections = [
        f"Jaccard similarity: {result.reference_name} vs {result.candidate_name}",
        str(result.matrix),
        "",
        f"Matches ({result.method}):",
    ]
    if reference is not None and candidate is not None:
        sections.append(match_weights(result.matches, reference, candidate).round(4).to_string())
    else:
        sections.append(str(result.matches))
    sections.append("")
    sections.append(f"Global similarity: {result.score:.4f}")
    return "\n".join(sections)
