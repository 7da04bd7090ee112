import pickle

import networkx as nx
import pytest

from clustersim.similarity.errors import InvalidInput
from clustersim.utils.graph_ops import (
    communities_to_partition,
    load_graph,
    partition_from_attribute,
    partition_to_communities,
)


def test_list_of_sets_is_labelled_from_one():
    assert communities_to_partition([{0, 1}, {2, 3}], [0, 1, 2, 3]) == [1, 1, 2, 2]


def test_dict_keys_become_labels():
    clusters = {'a': [0], 'b': [1, 2]}

    assert communities_to_partition(clusters, [2, 1, 0]) == ['b', 'b', 'a']


def test_overlapping_communities_rejected():
    with pytest.raises(InvalidInput):
        communities_to_partition([{0, 1}, {1, 2}], [0, 1, 2])


def test_uncovered_node_rejected():
    with pytest.raises(InvalidInput):
        communities_to_partition([{0, 1}], [0, 1, 2])


def test_partition_to_communities_inverse():
    nodes = ['x', 'y', 'z']
    clusters = partition_to_communities([2, 1, 2], nodes)

    assert clusters == {2: ['x', 'z'], 1: ['y']}
    assert communities_to_partition(clusters, nodes) == [2, 1, 2]


def test_partition_to_communities_length_mismatch():
    with pytest.raises(InvalidInput):
        partition_to_communities([1, 2], ['x'])


def test_partition_from_attribute(karate):
    partition = partition_from_attribute(karate, 'club')

    assert len(partition) == karate.number_of_nodes()
    assert set(partition) == {'Mr. Hi', 'Officer'}


def test_partition_from_missing_attribute(karate):
    with pytest.raises(InvalidInput):
        partition_from_attribute(karate, 'no_such_attr')


def test_load_graph(tmp_path):
    G = nx.path_graph(4)
    path = tmp_path / 'graph.pkl'
    with open(path, 'wb') as f:
        pickle.dump(G, f)

    loaded = load_graph(str(path))
    assert sorted(loaded.edges()) == sorted(G.edges())
