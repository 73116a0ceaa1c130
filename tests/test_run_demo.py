# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Tests for the hydra-configured demo entry point."""

import contextlib
import io
import unittest

from hydra import compose, initialize
from omegaconf import OmegaConf

from run_demo import demo


class RunDemoConfigTests(unittest.TestCase):
    def _compose(self, overrides=()):
        with initialize(version_base="1.1", config_path="../config"):
            return compose(config_name="defaults", overrides=list(overrides))

    def test_default_config(self):
        cfg = self._compose()
        self.assertEqual(OmegaConf.to_container(cfg.inputs), [1, 5, 16, 1000000])
        self.assertEqual(OmegaConf.to_container(cfg.vector), [1, 2, 3])
        self.assertFalse(cfg.print_config)

    def test_run_writes_no_files(self):
        with initialize(version_base="1.1", config_path="../config"):
            cfg = compose(config_name="defaults", return_hydra_config=True)
        self.assertEqual(cfg.hydra.run.dir, ".")
        self.assertIsNone(cfg.hydra.output_subdir)
        self.assertIsNone(OmegaConf.select(cfg, "hydra.job_logging.handlers.file"))

    def test_demo_with_overrides(self):
        cfg = self._compose(["inputs=[4,9]", "vector=[3,4,0]", "header=hi"])
        captured = io.StringIO()
        with contextlib.redirect_stdout(captured):
            demo(cfg)
        self.assertEqual(
            captured.getvalue(),
            "hi\n"
            "fast_rsqrt(4) = 32768\n"
            "fast_rsqrt(9) = 21845\n"
            "Distance of (3, 4, 0) = 4\n",
        )


if __name__ == "__main__":
    unittest.main()
