"""Detection of suspicious task behaviour and the messages describing it."""

from __future__ import annotations

import abc
import enum
import time
import weakref
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

from consoleview.styles import format_duration_debug


class TaskLike(Protocol):
    """What the warnings need to know about a monitored task."""

    def is_blocking(self) -> bool: ...

    def is_completed(self) -> bool: ...

    def is_running(self) -> bool: ...

    def is_awakened(self) -> bool: ...

    def waker_count(self) -> int: ...

    def self_wake_percent(self) -> int: ...

    def total_polls(self) -> int: ...

    def busy(self, now: int) -> int:
        """Nanoseconds spent busy up to ``now`` (nanoseconds since the epoch)."""
        ...

    def size_bytes(self) -> int | None: ...

    def original_size_bytes(self) -> int | None: ...


class Warning(enum.Enum):
    """Outcome of checking one entity for one warning."""

    OK = "ok"
    WARN = "warn"
    RECHECK = "recheck"


class Warn(abc.ABC):
    """A kind of warning: how to detect it and how to describe it."""

    @abc.abstractmethod
    def check(self, task: TaskLike) -> Warning:
        """Whether the warning applies to ``task``."""

    @abc.abstractmethod
    def format(self, task: TaskLike) -> str:
        """A full sentence describing the warning for this particular task."""

    @abc.abstractmethod
    def summary(self) -> str:
        """A fragment that reads well after a count, e.g. "45 tasks have ..."."""


class Linter:
    """Wraps a warning and counts the entities currently holding it.

    Each positive check hands out a handle; an entity keeps the handle for as
    long as the warning applies to it, and the count is the number of handles
    still alive.
    """

    def __init__(self, warning: Warn) -> None:
        self._warning = warning
        self._handles: weakref.WeakSet[Linter] = weakref.WeakSet()

    @classmethod
    def _share(cls, other: Linter) -> Linter:
        handle = cls.__new__(cls)
        handle._warning = other._warning
        handle._handles = other._handles
        other._handles.add(handle)
        return handle

    def check(self, task: TaskLike) -> Lint:
        """Check ``task``; a warning result carries a handle to hold on to."""
        result = self._warning.check(task)
        if result is Warning.WARN:
            return Lint(Warning.WARN, Linter._share(self))
        return Lint(result)

    def count(self) -> int:
        """Number of entities that currently have this warning."""
        return len(self._handles)

    def format(self, task: TaskLike) -> str:
        if self._warning.check(task) is not Warning.WARN:
            raise ValueError(
                "tried to format a warning for a task that did not have that warning"
            )
        return self._warning.format(task)

    def summary(self) -> str:
        return self._warning.summary()

    def __repr__(self) -> str:
        return f"Linter({self._warning!r})"


@dataclass(frozen=True)
class Lint:
    """Result of a linter check; ``linter`` is set only for warnings."""

    status: Warning
    linter: Linter | None = None

    @property
    def is_ok(self) -> bool:
        return self.status is Warning.OK

    @property
    def is_warning(self) -> bool:
        return self.status is Warning.WARN

    @property
    def needs_recheck(self) -> bool:
        return self.status is Warning.RECHECK


class SelfWakePercent(Warn):
    """Tasks that wake themselves more often than a given percentage."""

    DEFAULT_PERCENT = 50

    def __init__(self, min_percent: int = DEFAULT_PERCENT) -> None:
        self.min_percent = min_percent
        self._description = (
            f"tasks have woken themselves over {min_percent}% of the time"
        )

    def summary(self) -> str:
        return self._description

    def check(self, task: TaskLike) -> Warning:
        if task.is_blocking():
            return Warning.OK
        if task.self_wake_percent() > self.min_percent:
            return Warning.WARN
        return Warning.OK

    def format(self, task: TaskLike) -> str:
        return (
            f"This task has woken itself for more than {self.min_percent}% "
            f"of its total wakeups ({task.self_wake_percent()}%)"
        )

    def __repr__(self) -> str:
        return f"SelfWakePercent(min_percent={self.min_percent})"


class LostWaker(Warn):
    """Tasks that are idle with no waker left to wake them."""

    def summary(self) -> str:
        return "tasks have lost their wakers"

    def check(self, task: TaskLike) -> Warning:
        if task.is_blocking():
            return Warning.OK
        if (
            not task.is_completed()
            and task.waker_count() == 0
            and not task.is_running()
            and not task.is_awakened()
        ):
            return Warning.WARN
        return Warning.OK

    def format(self, task: TaskLike) -> str:
        return "This task has lost its waker, and will never be woken again."

    def __repr__(self) -> str:
        return "LostWaker()"


class NeverYielded(Warn):
    """Running tasks that have been busy in their first poll for too long."""

    DEFAULT_DURATION = timedelta(seconds=1)

    def __init__(
        self,
        min_duration: timedelta = DEFAULT_DURATION,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self.min_duration = min_duration
        self._min_nanos = (
            min_duration // timedelta(microseconds=1)
        ) * 1_000
        self._clock = clock
        millis = min_duration // timedelta(milliseconds=1)
        self._description = f"tasks have never yielded (threshold {millis}ms)"

    def summary(self) -> str:
        return self._description

    def check(self, task: TaskLike) -> Warning:
        if task.is_blocking():
            return Warning.OK
        if not task.is_running():
            return Warning.OK
        if task.total_polls() > 1:
            return Warning.OK
        # Short-lived tasks get another look before being flagged.
        if task.busy(self._clock()) >= self._min_nanos:
            return Warning.WARN
        return Warning.RECHECK

    def format(self, task: TaskLike) -> str:
        busy = format_duration_debug(task.busy(self._clock()))
        return f"This task has never yielded ({busy})"

    def __repr__(self) -> str:
        return f"NeverYielded(min_duration={self.min_duration!r})"


class AutoBoxedFuture(Warn):
    """Tasks whose future the runtime boxed because it was too large."""

    def summary(self) -> str:
        return "tasks have been boxed by the runtime due to their size"

    def check(self, task: TaskLike) -> Warning:
        size, original = task.size_bytes(), task.original_size_bytes()
        if size is None or original is None:
            return Warning.OK
        return Warning.WARN if original != size else Warning.OK

    def format(self, task: TaskLike) -> str:
        original = task.original_size_bytes()
        if original is None:
            raise ValueError("warning should not trigger if original size is None")
        boxed = task.size_bytes()
        if boxed is None:
            raise ValueError("warning should not trigger if size is None")
        return (
            "This task's future was auto-boxed by the runtime when spawning, "
            f"due to its size (originally {original} bytes, boxed size {boxed} bytes)"
        )

    def __repr__(self) -> str:
        return "AutoBoxedFuture()"


class LargeFuture(Warn):
    """Tasks whose future occupies at least a given number of bytes."""

    DEFAULT_MIN_SIZE_BYTES = 1024

    def __init__(self, min_size: int = DEFAULT_MIN_SIZE_BYTES) -> None:
        self.min_size = min_size
        self._description = f"tasks are {min_size} bytes or larger"

    def summary(self) -> str:
        return self._description

    def check(self, task: TaskLike) -> Warning:
        if task.is_blocking():
            return Warning.OK
        size = task.size_bytes()
        if size is not None and size >= self.min_size:
            return Warning.WARN
        return Warning.OK

    def format(self, task: TaskLike) -> str:
        size = task.size_bytes()
        if size is None:
            raise ValueError("warning should not trigger if size is None")
        return f"This task occupies a large amount of stack space ({size} bytes)"

    def __repr__(self) -> str:
        return f"LargeFuture(min_size={self.min_size})"