import logging
import time
from typing import Callable, TypeVar

import polars as pl

logger = logging.getLogger(__name__)

T = TypeVar("T")


def configure_logging(log_file: str) -> None:
    logging.basicConfig(
        filename=log_file,
        encoding="utf-8",
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # urllib3 logs every request at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def log_action(action: str, func: Callable[[], T]) -> T:
    logger.info(f"Running {action}")
    start_time = time.time()
    result = func()
    elapsed = time.time() - start_time
    if isinstance(result, pl.DataFrame):
        logger.info(f"{action} completed in {elapsed:.4f}s ({result.height} rows)")
    else:
        logger.info(f"{action} completed in {elapsed:.4f}s")
    return result
