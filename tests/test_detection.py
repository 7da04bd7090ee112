import pytest

from clustersim.models.Detection.config import detection_params
from clustersim.models.Detection.detect import DETECTORS, run_all, run_detection
from clustersim.similarity.compare import rank_candidates
from clustersim.similarity.errors import InvalidInput
from clustersim.utils.graph_ops import partition_from_attribute


def test_every_detector_has_params():
    assert set(DETECTORS) == set(detection_params)


@pytest.mark.parametrize("name", ['louvain', 'greedy_modularity', 'label_propagation', 'asyn_lpa', 'kernighan_lin'])
def test_detector_covers_all_nodes(karate, name):
    partition = run_detection(karate, name)

    assert len(partition) == karate.number_of_nodes()
    assert min(partition) == 1


def test_louvain_is_seeded(karate):
    assert run_detection(karate, 'louvain') == run_detection(karate, 'louvain')


def test_kernighan_lin_bisects(karate):
    assert len(set(run_detection(karate, 'kernighan_lin'))) == 2


def test_girvan_newman_first_split(karate):
    partition = run_detection(karate, 'girvan_newman', params={'level': 1})

    assert len(set(partition)) == 2


def test_custom_nodelist(karate):
    nodelist = list(reversed(list(karate.nodes())))
    forward = run_detection(karate, 'kernighan_lin')
    backward = run_detection(karate, 'kernighan_lin', nodelist=nodelist)

    assert backward == list(reversed(forward))


def test_unknown_detector(karate):
    with pytest.raises(InvalidInput):
        run_detection(karate, 'spectral')


def test_run_all_ranks_against_ground_truth(karate):
    truth = partition_from_attribute(karate, 'club')
    partitions = run_all(karate, ['kernighan_lin', 'louvain'])

    assert list(partitions) == ['kernighan_lin', 'louvain']
    ranking = rank_candidates(truth, partitions)
    assert set(ranking.index) == {'kernighan_lin', 'louvain'}
    assert ranking['score'].between(0.0, 1.0).all()
