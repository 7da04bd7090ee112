import argparse
import logging

import yaml

from clustersim.utils.functions import LoadConfig, print_time
from clustersim.utils.logger import get_logger, setup_logging


def test_load_config_merges_cli_over_yaml(tmp_path):
    config_path = tmp_path / 'run.yaml'
    config_path.write_text(yaml.safe_dump({'method': 'greedy', 'savepath': 'result', 'logpath': 'None'}))

    args = argparse.Namespace(config_path=str(config_path), method=None, savepath='elsewhere')
    config = LoadConfig(args)

    assert config.method == 'greedy'
    assert config.savepath == 'elsewhere'
    assert config.logpath is None
    assert config.config_path == str(config_path)


def test_print_time():
    assert print_time(3725.4) == "1:02:05"
    assert print_time(0) == "0:00:00"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / 'logs' / 'run.log'
    setup_logging(log_file=str(log_file), level=logging.DEBUG, force=True)

    get_logger('clustersim.test').info("hello")
    for handler in logging.getLogger("clustersim").handlers:
        handler.flush()

    assert "hello" in log_file.read_text()
    assert " | INFO     | clustersim.test | " in log_file.read_text()
    setup_logging(level=logging.INFO, force=True)


def test_setup_logging_leaves_root_logger_alone():
    root_handlers = list(logging.getLogger().handlers)
    setup_logging(level=logging.INFO, force=True)

    assert logging.getLogger().handlers == root_handlers
    assert len(logging.getLogger('clustersim').handlers) == 1


def test_get_logger_names_are_namespaced():
    assert get_logger('CompareScript').name == 'clustersim.CompareScript'
    assert get_logger('clustersim.similarity.jaccard').name == 'clustersim.similarity.jaccard'
    assert get_logger('clustersim').name == 'clustersim'
