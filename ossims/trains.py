"""Automated control of a single-track railway crossing shared by trains.

Each train loads, announces that it is ready, waits until the controller
grants it the main track, crosses, and frees the track again.  A scheduler
chooses the next train by priority, direction and readiness, and prevents
starvation of one direction.
"""

from __future__ import annotations

import re
import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO, Iterable, Sequence

MAX_TRAINS = 75

_ENTRY = re.compile(r"\s*(\S)\s*([+-]?\d+)\s*([+-]?\d+)")


class Direction(Enum):
    """Travel direction of a train."""

    EAST = "E"
    WEST = "W"

    @property
    def label(self) -> str:
        return "East" if self is Direction.EAST else "West"


@dataclass
class Train:
    """A train waiting to cross; times are in simulation units."""

    id: int
    direction: Direction
    priority: int
    loading_time: int
    crossing_time: int
    ready_time: float = 0.0


def parse_trains(text: str) -> list[Train]:
    """Parse train descriptions of the form ``<dir> <load> <cross>``.

    ``e``/``E`` means east, anything else west; an upper-case letter marks
    a high-priority train.  Parsing stops at the first malformed entry or
    after ``MAX_TRAINS`` trains.
    """
    trains: list[Train] = []
    pos = 0
    while len(trains) < MAX_TRAINS:
        match = _ENTRY.match(text, pos)
        if match is None:
            break
        pos = match.end()
        char, load, cross = match.group(1), int(match.group(2)), int(match.group(3))
        trains.append(
            Train(
                id=len(trains),
                direction=Direction.EAST if char in "eE" else Direction.WEST,
                priority=1 if char.isupper() else 0,
                loading_time=load,
                crossing_time=cross,
            )
        )
    return trains


def format_sim_time(elapsed: float) -> str:
    """Format elapsed seconds as ``HH:MM:SS.t``, rounded to a tenth."""
    total_tenths = int(elapsed * 10 + 0.5)
    hours, rest = divmod(total_tenths, 36000)
    minutes, rest = divmod(rest, 600)
    seconds, tenths = divmod(rest, 10)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{tenths}"


def _preferred(train: Train, current: Train, last: Direction | None) -> bool:
    """Whether ``train`` should replace ``current`` as the candidate."""
    if train.priority != current.priority:
        return train.priority > current.priority
    if train.direction == current.direction:
        return (train.ready_time, train.id) < (current.ready_time, current.id)
    if last is None:
        return train.direction is Direction.WEST
    return current.direction == last and train.direction != last


def _best(trains: Iterable[Train], last: Direction | None) -> Train | None:
    candidate: Train | None = None
    for train in trains:
        if candidate is None or _preferred(train, candidate, last):
            candidate = train
    return candidate


def select_next_train(
    waiting: Sequence[Train],
    last_direction: Direction | None,
    consecutive: int,
) -> Train | None:
    """Choose which waiting train gets the main track next.

    After two consecutive crossings in one direction, trains heading the
    other way are preferred whenever any are waiting.
    """
    pool: Iterable[Train] = waiting
    if consecutive >= 2 and last_direction is not None:
        opposite = [t for t in waiting if t.direction != last_direction]
        if opposite:
            pool = opposite
    candidate = _best(pool, last_direction)
    if candidate is None:
        candidate = _best(waiting, last_direction)
    return candidate


class Controller:
    """Runs the crossing simulation with one thread per train."""

    def __init__(
        self,
        trains: Sequence[Train],
        out: IO[str] | None = None,
        time_unit: float = 0.1,
    ) -> None:
        self.trains = list(trains)
        self.out = out if out is not None else sys.stdout
        self.time_unit = time_unit
        self._lock = threading.Lock()
        self._sched_cond = threading.Condition(self._lock)
        self._train_conds = {t.id: threading.Condition(self._lock) for t in self.trains}
        self._scheduled: set[int] = set()
        self._waiting: list[Train] = []
        self._finished = 0
        self._track_in_use = False
        self._last_direction: Direction | None = None
        self._consecutive = 0
        self._crossed: list[Train] = []
        self._start = 0.0

    def _elapsed(self) -> float:
        return time.monotonic() - self._start

    def _emit(self, train: Train, message: str) -> None:
        stamp = format_sim_time(self._elapsed())
        self.out.write(f"{stamp} Train {train.id:2d} {message} {train.direction.label:>4s}\n")
        self.out.flush()

    def _schedule(self) -> None:
        total = len(self.trains)
        with self._lock:
            while self._finished < total:
                while self._track_in_use or not self._waiting:
                    if self._finished == total:
                        return
                    self._sched_cond.wait()
                candidate = select_next_train(
                    self._waiting, self._last_direction, self._consecutive
                )
                if candidate is None:
                    continue
                self._waiting.remove(candidate)
                self._scheduled.add(candidate.id)
                self._track_in_use = True
                self._train_conds[candidate.id].notify()

    def _travel(self, train: Train) -> None:
        time.sleep(train.loading_time * self.time_unit)
        train.ready_time = self._elapsed()
        cond = self._train_conds[train.id]
        with self._lock:
            self._emit(train, "is ready to go")
            self._waiting.append(train)
            self._sched_cond.notify()
            while train.id not in self._scheduled:
                cond.wait()
            if self._last_direction == train.direction:
                self._consecutive += 1
            else:
                self._consecutive = 1
            self._last_direction = train.direction
            self._crossed.append(train)
            self._emit(train, "is ON the main track going")

        time.sleep(train.crossing_time * self.time_unit)

        with self._lock:
            self._emit(train, "is OFF the main track after going")
            self._finished += 1
            self._track_in_use = False
            self._sched_cond.notify()

    def run(self) -> list[Train]:
        """Run the simulation and return the trains in crossing order."""
        self._start = time.monotonic()
        scheduler = threading.Thread(target=self._schedule, name="scheduler")
        scheduler.start()
        workers = [
            threading.Thread(target=self._travel, args=(t,), name=f"train-{t.id}")
            for t in self.trains
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()
        with self._lock:
            self._sched_cond.notify_all()
        scheduler.join()
        return list(self._crossed)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: simulate the trains described in a file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: mts input_file", file=sys.stderr)
        return 1
    try:
        with open(args[0], encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"Error opening input file: {exc.strerror}", file=sys.stderr)
        return 1
    Controller(parse_trains(text)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())