# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Print the fast_rsqrt demo transcript.

    python run_demo.py
    python run_demo.py inputs=[4,9,1000] vector=[3,4,0]
"""

import logging
import os
from logging import Logger

import hydra
from omegaconf import DictConfig, OmegaConf

from fast_rsqrt.demo import run_demo
from fast_rsqrt.output import OutputSink

logger: Logger = logging.getLogger(__name__)


def demo(cfg: DictConfig):
    values = [int(v) for v in cfg.inputs]
    vector = [int(v) for v in cfg.vector]
    logger.info("Running demo on %d values and vector %s", len(values), vector)
    run_demo(OutputSink(), values=values, vector=vector, header=cfg.header)


@hydra.main(config_path="./config", config_name="defaults", version_base="1.1")
def run(cfg: DictConfig):
    if cfg.print_config:
        print(OmegaConf.to_yaml(cfg, resolve=True))
    demo(cfg)


if __name__ == "__main__":
    os.environ["HYDRA_FULL_ERROR"] = "1"
    run()
