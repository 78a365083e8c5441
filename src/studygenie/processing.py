"""Sequential named-stage runner for simulated long-running work."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from studygenie.utils import percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
    name: str
    duration: float = 0.0
    action: Optional[Callable[[], None]] = None


def run_stages(stages, on_progress=None, sleep=time.sleep) -> None:
    """Run each stage in order and report ``on_progress(name, percent)`` after it.

    A stage with an ``action`` runs it; otherwise it sleeps for ``duration``.
    Stages cannot be cancelled or retried.
    """
    stages = list(stages)
    for i, stage in enumerate(stages):
        logger.debug("Stage %d/%d: %s", i + 1, len(stages), stage.name)
        if stage.action is not None:
            stage.action()
        else:
            sleep(stage.duration)
        if on_progress is not None:
            on_progress(stage.name, percent(i + 1, len(stages)))
