"""Time a synthetic nested workload and print the report."""

from __future__ import annotations

import time
from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from lapwatch.report.renderer import render_statistic
from lapwatch.timing.scoped import ScopedTimer, tic_toc
from lapwatch.utils.config import LoggerSettings, RenderConfig
from lapwatch.utils.logging import Logger, logger, setup_logging
from lapwatch.utils.throttler import Throttler


@hydra.main(config_path="../configs", config_name="demo", version_base=None)
def main(cfg: DictConfig) -> None:
    log_file = Path(to_absolute_path(cfg.log_file)) if cfg.log_file else None
    setup_logging(log_file, level="DEBUG" if cfg.logging.debug else cfg.log_level)

    log = Logger("demo", LoggerSettings(**cfg.logging))
    progress = Throttler(log, 0.05)

    with ScopedTimer("workload", sink=log, config=RenderConfig(**cfg.render)) as root:
        regions = [root.nest(name) for name in cfg.inner_regions]
        for i in range(cfg.iterations):
            time.sleep(cfg.outer_sleep_ms / 1000.0)
            for region in regions:
                with tic_toc(region):
                    time.sleep(cfg.inner_sleep_ms / 1000.0)
            progress(Logger.info, "iteration {} of {}", i + 1, cfg.iterations)
            log.debug("iteration {} done", i)

        def dump_regions() -> None:
            for region in regions:
                log.write(render_statistic(region.stats))

        log.debug_block(dump_regions)

    logger.info("Demo finished after {n} iterations", n=cfg.iterations)


if __name__ == "__main__":
    main()
