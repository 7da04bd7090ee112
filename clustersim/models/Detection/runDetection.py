import os
import time
import pickle
import logging
import argparse
from typing import Optional

import networkx as nx

from clustersim.models.Detection.config import SEED, detection_params
from clustersim.models.Detection.detect import DETECTORS, run_detection
from clustersim.similarity.compare import best_candidate, compare_partitions, format_report, rank_candidates
from clustersim.similarity.config import similarity_params
from clustersim.similarity.errors import InvalidInput
from clustersim.utils.functions import print_time, set_seed
from clustersim.utils.graph_ops import load_graph, partition_from_attribute
from clustersim.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

BUILTIN_GRAPHS = {
    'karate_club': (nx.karate_club_graph, 'club'),
}


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run community detection and compare against a ground truth.")

    # Input/Output paths
    parser.add_argument('--graph_path', type=str, default=None, help='Path to graph data (pickle)')
    parser.add_argument('--builtin', type=str, default=None, choices=list(BUILTIN_GRAPHS),
                        help='Use a bundled benchmark graph instead of --graph_path')
    parser.add_argument('--ground_truth_attr', type=str, default=None,
                        help='Node attribute holding the ground-truth cluster label')
    parser.add_argument('--savepath', type=str, required=True, help='Directory to save results')
    parser.add_argument('--logpath', type=str, default=None, help='Path to save logs (optional)')

    # Execution parameters
    parser.add_argument('--measure', type=str, nargs='+', default=['all'],
                        help='Detection algorithm(s) to run (e.g., louvain asyn_lpa). Use "all" for all.')
    parser.add_argument('--method', type=str, default=similarity_params['method'], choices=['greedy', 'bipartite'],
                        help='Cluster matching policy')
    parser.add_argument('--order', type=str, default=similarity_params['order'], choices=['sorted', 'first_seen'])

    return parser


def load_input(config: argparse.Namespace):
    """Returns (graph, ground-truth attribute name)."""
    if config.builtin:
        factory, default_attr = BUILTIN_GRAPHS[config.builtin]
        return factory(), config.ground_truth_attr or default_attr

    if not config.graph_path:
        raise InvalidInput("Either --graph_path or --builtin is required.")
    if not config.ground_truth_attr:
        raise InvalidInput("--ground_truth_attr is required with --graph_path.")
    return load_graph(config.graph_path), config.ground_truth_attr


def main(config: argparse.Namespace) -> Optional[str]:
    start_total = time.time()
    logger.info("=" * 60)
    logger.info("STARTING DETECTION / COMPARISON")
    logger.info(vars(config))
    logger.info("=" * 60)

    set_seed(SEED)
    G, gt_attr = load_input(config)
    nodelist = list(G.nodes())
    ground_truth = partition_from_attribute(G, gt_attr, nodelist)
    logger.info(f"[Graph Info] Nodes: {G.number_of_nodes()}, Edges: {G.number_of_edges()}")
    logger.info(f"[Ground Truth] '{gt_attr}': {len(set(ground_truth))} clusters")

    measures_to_run = config.measure
    if 'all' in measures_to_run:
        measures_to_run = list(DETECTORS.keys())

    os.makedirs(config.savepath, exist_ok=True)
    partitions = {}

    for measure in measures_to_run:
        if measure not in DETECTORS:
            logger.warning(f"Measure '{measure}' not registered. Skipping...")
            continue

        logger.info(f"Running Detection: {measure} {detection_params.get(measure, {})}")
        measure_start = time.time()
        try:
            partition = run_detection(G, measure, nodelist=nodelist)
        except (InvalidInput, nx.NetworkXError) as e:
            logger.error(f"{measure} failed: {e}")
            continue

        partitions[measure] = partition
        result = compare_partitions(
            ground_truth, partition,
            candidate_name=measure, method=config.method, order=config.order
        )
        logger.info(f"-> {measure}: {len(set(partition))} clusters, similarity {result.score:.4f} "
                    f"({print_time(time.time() - measure_start)})")
        logger.debug("\n" + format_report(result, ground_truth, partition))

        result.matrix.to_frame().to_csv(os.path.join(config.savepath, f'{measure}_jaccard.csv'))
        result.matches.to_frame().to_csv(os.path.join(config.savepath, f'{measure}_matches.csv'))

    if not partitions:
        logger.error("No detection algorithm produced a partition.")
        return None

    ranking = rank_candidates(ground_truth, partitions, method=config.method, order=config.order)
    ranking.to_csv(os.path.join(config.savepath, 'ranking.csv'))

    with open(os.path.join(config.savepath, 'partitions.pkl'), 'wb') as f:
        pickle.dump({'nodelist': nodelist, 'ground_truth': ground_truth, 'partitions': partitions}, f)

    best = best_candidate(ranking)
    logger.info("\n" + ranking.round(4).to_string())
    logger.info(f"Best algorithm: {best} (score {ranking.loc[best, 'score']:.4f})")
    logger.info(f"Total time: {print_time(time.time() - start_total)}")
    return best


if __name__ == '__main__':
    run_config = get_parser().parse_args()
    setup_logging(log_file=run_config.logpath, level=logging.INFO, force=True)
    main(run_config)
