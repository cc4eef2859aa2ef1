"""Progress reporting for long-running pipeline stages."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# (stage, current, total) with stage one of "theatres", "showtimes", "seats".
# Callbacks are plain functions; the pipeline never awaits them.
ProgressCallback = Callable[[str, int, int], Any]


def notify(progress: ProgressCallback | None, stage: str, current: int, total: int) -> None:
    """
    Call the progress callback, never letting it interrupt the pipeline.

    A callback that raises is logged and ignored. A coroutine function is
    not supported: the coroutine it returns is closed unawaited and a
    warning is logged.
    """
    if progress is None:
        return
    try:
        result = progress(stage, current, total)
    except Exception as e:
        logger.warning(f"Progress callback failed at {stage} {current}/{total}: {e}")
        return
    if inspect.iscoroutine(result):
        result.close()
        logger.warning(f"Progress callback for {stage} returned a coroutine; callbacks must be synchronous")
