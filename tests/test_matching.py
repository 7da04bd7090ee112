import numpy as np
import pytest

from clustersim.similarity.errors import InvalidInput
from clustersim.similarity.jaccard import SimilarityMatrix, jaccard_matrix
from clustersim.similarity.matching import (
    MATCHERS,
    Match,
    MatchSet,
    bipartite_optimal_match,
    greedy_row_match,
    match_clusters,
)


def test_greedy_two_by_two(reference, candidate):
    matches = greedy_row_match(jaccard_matrix(reference, candidate))

    assert matches[1] == Match(1, 1, pytest.approx(2 / 3))
    assert matches[2].candidate == 2
    assert matches[2].similarity == pytest.approx(0.5)


def test_one_entry_per_reference_cluster(rng):
    a = rng.integers(0, 7, size=50)
    b = rng.integers(0, 3, size=50)
    matches = greedy_row_match(jaccard_matrix(a, b))

    assert list(matches) == sorted(set(a.tolist()))


def test_tie_goes_to_first_column():
    # reference cluster {0,1} overlaps candidate 1 and 2 equally
    matches = greedy_row_match(jaccard_matrix([1, 1, 2, 2], [1, 2, 3, 3]))

    assert matches[1].candidate == 1
    assert matches[1].similarity == pytest.approx(0.5)


def test_greedy_reuses_candidates(reused_candidate):
    ref, cand = reused_candidate
    matches = greedy_row_match(jaccard_matrix(ref, cand))

    assert [matches[label].candidate for label in (1, 2, 3)] == [1, 1, 2]
    assert matches.candidate_usage() == {1: 2, 2: 1}


def test_bipartite_is_one_to_one(reused_candidate):
    ref, cand = reused_candidate
    matches = bipartite_optimal_match(jaccard_matrix(ref, cand))

    assert len(matches) == 3
    assert matches[3].candidate == 2
    assert matches[3].similarity == pytest.approx(1.0)
    unmatched = [label for label in matches if matches[label].candidate is None]
    assert len(unmatched) == 1
    assert matches[unmatched[0]].similarity == 0.0
    assert all(count == 1 for count in matches.candidate_usage().values())


def test_bipartite_agrees_with_greedy_on_clear_case(reference, candidate):
    matrix = jaccard_matrix(reference, candidate)

    assert bipartite_optimal_match(matrix).matches() == greedy_row_match(matrix).matches()


def test_match_clusters_dispatch(reference, candidate):
    matrix = jaccard_matrix(reference, candidate)

    assert set(MATCHERS) == {'greedy', 'bipartite'}
    assert match_clusters(matrix).matches() == greedy_row_match(matrix).matches()
    with pytest.raises(InvalidInput):
        match_clusters(matrix, method='hungarian')


@pytest.mark.parametrize("shape", [(0, 2), (2, 0), (0, 0)])
@pytest.mark.parametrize("matcher", [greedy_row_match, bipartite_optimal_match])
def test_empty_matrix(shape, matcher):
    matrix = SimilarityMatrix(
        values=np.zeros(shape),
        row_labels=tuple(range(shape[0])),
        col_labels=tuple(range(shape[1])),
    )

    with pytest.raises(InvalidInput):
        matcher(matrix)


def test_names_and_frame(reference, candidate):
    matches = greedy_row_match(jaccard_matrix(reference, candidate, 'GT', 'louvain'))

    assert matches.names() == ['GT.1 -> louvain.1 (0.6667)', 'GT.2 -> louvain.2 (0.5000)']
    frame = matches.to_frame()
    assert list(frame.index) == ['GT.1', 'GT.2']
    assert frame.loc['GT.2', 'candidate'] == 'louvain.2'


def test_duplicate_reference_label():
    with pytest.raises(InvalidInput):
        MatchSet([Match(1, 1, 0.5), Match(1, 2, 0.1)])
