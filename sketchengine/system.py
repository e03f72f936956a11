"""Base class for engine systems that run their work on a paced thread."""

from __future__ import annotations

import logging
import math
import os
import threading
from abc import ABC, abstractmethod
from collections import Counter
from typing import Optional

from .messages import SET_CORE, SET_FREQUENCY, Addressee, Message, SystemMessage
from .timer import Timer

logger = logging.getLogger(__name__)


class System(ABC):
    """Runs ``process`` on its own thread at a target frequency, pinned to a core."""

    core_record: list[int] = []

    def __init__(
        self,
        frequency: float = 60,
        core: Optional[int] = None,
        *,
        core_record: Optional[list[int]] = None,
        cpu_count: Optional[int] = None,
    ) -> None:
        self._core_record = System.core_record if core_record is None else core_record
        self._cpu_count = cpu_count or os.cpu_count() or 1
        self.address = Addressee.ALL
        self.frequency = frequency
        self.timer = Timer(frequency)
        if core is None or not 0 <= core < self._cpu_count:
            core = self.least_utilised_core()
        self.core = core
        self._core_record.append(core)

        self._entity_lock = threading.Lock()
        self._should_join = threading.Event()
        self._should_change_core = False
        self._pull_condition = threading.Condition()
        self._pull_requested = False
        self._thread: Optional[threading.Thread] = None
        self._started = False
        self._actual_frequency = 0

    @property
    def actual_frequency(self) -> int:
        """Ticks per second measured on the last loop iteration."""
        return self._actual_frequency

    @property
    def started(self) -> bool:
        return self._started

    @property
    def core_change_pending(self) -> bool:
        return self._should_change_core

    @property
    def pull_requested(self) -> bool:
        """True while the system is waiting to rebuild its entity lists."""
        with self._pull_condition:
            return self._pull_requested

    def _request_pull(self) -> None:
        with self._pull_condition:
            self._pull_requested = True

    def _finish_pull(self) -> None:
        with self._pull_condition:
            self._pull_requested = False
            self._pull_condition.notify_all()

    def _wait_for_pull(self) -> None:
        with self._pull_condition:
            self._pull_condition.wait_for(lambda: not self._pull_requested)

    def least_utilised_core(self) -> int:
        """The lowest-numbered core with the fewest systems recorded on it."""
        usage = Counter(self._core_record)
        least_core = 0
        least_count = len(self._core_record)
        for core in range(self._cpu_count):
            if usage[core] < least_count:
                least_count = usage[core]
                least_core = core
        return least_core

    def set_frequency(self, frequency: float) -> None:
        self.frequency = frequency
        self.timer.set_frequency(frequency)

    def set_core(self, core: int) -> None:
        """Ask the running thread to move to ``core``."""
        self.core = core
        self._should_change_core = True

    def _apply_system_message(self, message: SystemMessage) -> None:
        if message.instruction == SET_FREQUENCY:
            self.set_frequency(message.value)
        elif message.instruction == SET_CORE:
            self.set_core(message.value)

    def _move_to_core(self) -> None:
        if not self._started:
            return
        if hasattr(os, "sched_setaffinity"):
            try:
                os.sched_setaffinity(0, {self.core})
            except OSError as error:
                logger.warning("%s: failed to move to core %d: %s", type(self).__name__, self.core, error)
        self._should_change_core = False

    def _run(self) -> None:
        self.set_core(self.core)
        self._move_to_core()
        while not self._should_join.is_set():
            self.timer.tick()
            fps = self.timer.fps
            self._actual_frequency = int(fps) if math.isfinite(fps) else 0
            self.process()
            if self._should_change_core:
                self._move_to_core()
            self.timer.wait_for_interval()

    def start_system(self) -> None:
        """Start the processing thread; does nothing if already started."""
        if self._started:
            return
        self._should_join.clear()
        self._started = True
        self._thread = threading.Thread(target=self._run, name=type(self).__name__, daemon=True)
        self._thread.start()

    def cancel_system(self) -> None:
        """Stop the processing thread and wait for it to finish."""
        self._should_join.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._started = False

    @abstractmethod
    def add_entity(self, entity) -> None:
        """Start tracking an entity's relevant components."""

    @abstractmethod
    def update_entity(self, entity) -> None:
        """Refresh the stored copies of an entity's components."""

    @abstractmethod
    def on_message(self, message: Message) -> None:
        """Receive an engine message."""

    @abstractmethod
    def process(self) -> None:
        """One unit of the system's work, run once per tick."""