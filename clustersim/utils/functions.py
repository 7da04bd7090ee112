import os
import yaml
import argparse

import random
import numpy as np


def LoadConfig(args):
    """
    Merges the run YAML (args.config_path) with the command line arguments.
    Command line values win over YAML values; "None" strings become None.
    """
    with open(args.config_path, 'r') as f:
        run_config = yaml.safe_load(f) or {}

    cli_config = {k: v for k, v in vars(args).items() if v is not None}
    combined_config = {**run_config, **cli_config}

    for key, value in combined_config.items():
        if value == "None":
            combined_config[key] = None

    return argparse.Namespace(**combined_config)

def print_time(elapsed):
    hours = int(elapsed // 3600)
    minutes = int((elapsed % 3600) // 60)
    seconds = int(elapsed % 60)
    formatted_time = f"{hours}:{minutes:02}:{seconds:02}"

    return formatted_time

def set_seed(seed):
    os.environ['PYTHONHASHSEED'] = str(seed)
    np.random.seed(seed)
    random.seed(seed)
