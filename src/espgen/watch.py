"""Regenerate a document whenever its device description changes.

Two watch modes are supported:
- ``event``: a watchdog observer reports writes to the description
- ``poll``: the description's mtime is checked every ``interval`` seconds,
  for filesystems that do not deliver events (network mounts)

Both feed a trailing debouncer, so a burst of saves regenerates once.
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .generator import ConfigGenerator
from .util import Debouncer

WATCH_MODES = ("event", "poll")

logger = logging.getLogger("espgen")


class DescriptionEventHandler(FileSystemEventHandler):
    """Forwards writes to a single file.

    Reads of the file (the generator opening it) and events on sibling files
    (the generated document) are ignored.
    """

    RELEVANT_EVENTS = {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}

    def __init__(self, path: Path, callback: Callable[[], Any]):
        super().__init__()
        self.path = Path(path).resolve()
        self.callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in self.RELEVANT_EVENTS:
            return

        # Editors often save by moving a temporary file over the original
        paths = [event.src_path, getattr(event, "dest_path", "")]
        if not any(path and Path(str(path)).resolve() == self.path for path in paths):
            return

        logger.debug(f"File event: {event.event_type} - {self.path.name}")
        self.callback()


def _mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


def regenerate(generator: ConfigGenerator, input_path: Path, output_path: Path) -> bool:
    """Regenerate once, logging failures instead of raising.

    Returns:
        True if the document was written.
    """
    try:
        generator.generate_from_file(input_path, output_path)
    except (OSError, RuntimeError) as e:
        logger.error(f"Generation failed: {e}")
        return False
    return True


def watch(
    input_path: Path,
    output_path: Path,
    interval: float = 0.25,
    wait: float = 0.5,
    stop: Callable[[], bool] = lambda: False,
    generator: ConfigGenerator | None = None,
    sleep: Callable[[float], None] = time.sleep,
    mode: str = "event",
    observer_factory: Callable[[], Any] = Observer,
) -> None:
    """Watch ``input_path`` and regenerate after edits settle.

    Rapid successive saves are coalesced by a trailing debounce of ``wait``
    seconds. The document is generated once at start if the description
    exists. The loop runs until ``stop`` returns True.

    Args:
        input_path: Device description to watch.
        output_path: Where the document is written.
        interval: Seconds between loop iterations.
        wait: Quiet period before regenerating.
        stop: Predicate ending the loop.
        generator: Generator to use; a new one by default.
        sleep: Sleep function between iterations.
        mode: ``event`` (watchdog observer) or ``poll`` (mtime checks).
        observer_factory: Creates the watchdog observer in ``event`` mode.

    Raises:
        ValueError: If the mode is unknown.
        FileNotFoundError: If the description's directory doesn't exist.
    """
    if mode not in WATCH_MODES:
        raise ValueError(f"Unknown watch mode '{mode}', expected one of {WATCH_MODES}")

    generator = generator or ConfigGenerator()
    input_path = Path(input_path).resolve()
    if not input_path.parent.is_dir():
        raise FileNotFoundError(f"Directory {input_path.parent} does not exist")

    debounced = Debouncer(
        lambda: regenerate(generator, input_path, output_path), wait=wait
    )

    if mode == "poll":
        _poll_loop(input_path, debounced, interval, stop, sleep)
        return

    handler = DescriptionEventHandler(input_path, debounced)
    observer = observer_factory()
    observer.schedule(handler, str(input_path.parent), recursive=False)
    observer.start()
    logger.info(f"Watching {input_path.as_posix()} for changes")

    try:
        if input_path.exists():
            debounced()
        while not stop():
            debounced.poll()
            sleep(interval)
    finally:
        observer.stop()
        observer.join()


def _poll_loop(
    input_path: Path,
    debounced: Debouncer,
    interval: float,
    stop: Callable[[], bool],
    sleep: Callable[[float], None],
) -> None:
    logger.info(f"Polling {input_path.as_posix()} every {interval}s")
    last_mtime: Optional[float] = None
    first = True
    while not stop():
        mtime = _mtime(input_path)
        if first or mtime != last_mtime:
            first = False
            last_mtime = mtime
            if mtime is not None:
                logger.debug(f"Change detected in {input_path.name}")
                debounced()
        debounced.poll()
        sleep(interval)
