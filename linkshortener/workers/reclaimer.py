"""Background reclamation of expired short links

A ReclamationWorker periodically sweeps the link store and removes every link
whose TTL has elapsed. Links that merely exhausted their access limit are kept
until they time-expire or their owner deletes them.

Each entry is re-checked and removed under the store lock one at a time, so a
sweep never holds the lock for longer than a single removal and a concurrent
resolution of the same shortcode either completes before the removal or sees
the link gone.

Classes:
    ReclamationWorker:
        Daemon thread running `run_once()` every `interval`.

Example:
    >>> from datetime import timedelta
    >>> worker = ReclamationWorker(dao, interval=timedelta(minutes=30))
    >>> worker.start()
    >>> worker.run_once()  # manual sweep, safe to call alongside the thread
    0
    >>> worker.stop()
"""

import logging
import threading
from datetime import timedelta

from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.constants import RECLAMATION_SWEEP, RECLAMATION_ENTRY_FAILED


logger = logging.getLogger(__name__)


class ReclamationWorker:
    """Periodically remove expired links from a ShortLinkBaseDAO.

    Attributes:
        dao (ShortLinkBaseDAO):
            Store to sweep.
        interval (timedelta):
            Delay between the end of one sweep and the start of the next.
            The first sweep runs one interval after `start()`.

    Methods:
        start() -> None:
            Start the background thread. Raises RuntimeError if already started.
        stop(timeout: float | None = None) -> None:
            Stop scheduling sweeps and wait for an in-flight sweep to complete.
        run_once() -> int:
            Sweep the store once; return the number of removed links.
    """

    def __init__(self, dao: ShortLinkBaseDAO, interval: timedelta):
        if interval <= timedelta(0):
            raise ValueError(f'Reclamation interval must be positive (given value: {interval}).')

        self.dao = dao
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError('Reclamation worker has already been started.')

        self._thread = threading.Thread(target=self._run, name='link-reclaimer', daemon=True)
        self._thread.start()
        logger.debug('Reclamation worker started.', extra={'interval_seconds': self.interval.total_seconds()})

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        logger.debug('Reclamation worker stopped.')

    def run_once(self) -> int:
        """Remove every expired link currently in the store

        A failure on one entry is logged and the sweep moves on to the next one.

        Returns:
            int: number of links removed by this sweep.
        """
        removed = 0
        for shortcode in self.dao.shortcodes():
            try:
                if self.dao.remove_if_expired(shortcode):
                    removed += 1
            except Exception:
                logger.exception(
                    'Failed to reclaim short link. Skipping entry.',
                    extra={'shortcode': shortcode, 'event': RECLAMATION_ENTRY_FAILED},
                )

        log = logger.info if removed else logger.debug
        log('Reclamation sweep removed %s expired links.', removed, extra={'removed': removed, 'event': RECLAMATION_SWEEP})
        return removed

    def _run(self) -> None:
        # Event.wait returns True once stop() is called
        while not self._stop_event.wait(self.interval.total_seconds()):
            try:
                self.run_once()
            except Exception:
                logger.exception('Reclamation sweep failed.', extra={'event': RECLAMATION_SWEEP})
