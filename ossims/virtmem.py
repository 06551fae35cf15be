"""Simulation of demand-paged virtual memory with page replacement.

A trace of memory references (``R: <hex>`` or ``W: <hex>``) is resolved
against an inverted page table of fixed size.  Page faults, swap-ins and
swap-outs of dirty pages are counted, and a victim frame is chosen by FIFO,
LRU or CLOCK replacement when memory is full.
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import IO, Iterable, Iterator, Sequence

PROGRESS_BAR_WIDTH = 60

_REFERENCE = re.compile(r"(.):\s*([+-]?(?:0[xX])?[0-9a-fA-F]+)", re.DOTALL)
_INTEGER = re.compile(r"\s*([+-]?\d+)")

USAGE = (
    "usage: virtmem --framesize=<m> --numframes=<n> "
    "--replace={fifo|lru|clock|optimal} [--file=<filename>]"
)


class Scheme(Enum):
    """Page replacement scheme."""

    NONE = "none"
    FIFO = "fifo"
    LRU = "lru"
    CLOCK = "clock"
    OPTIMAL = "optimal"


def parse_scheme(name: str) -> Scheme:
    """Return the scheme with the given name, or ``Scheme.NONE`` if unknown."""
    try:
        scheme = Scheme(name)
    except ValueError:
        return Scheme.NONE
    return scheme


@dataclass
class PageTableEntry:
    """One physical frame of the inverted page table."""

    page_num: int = 0
    dirty: bool = False
    free: bool = True
    timestamp: int = 0
    reference: bool = False


@dataclass
class Stats:
    """Counters of simulated memory-system events."""

    mem_refs: int = 0
    page_faults: int = 0
    swap_ins: int = 0
    swap_outs: int = 0


class AddressError(Exception):
    """A logical address could not be mapped to a physical frame."""

    def __init__(self, address: int, line: int | None = None) -> None:
        self.address = address
        self.line = line
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"cannot resolve address {address:#x}{where}")


def format_report(stats: Stats) -> str:
    """Render the end-of-run report."""
    return (
        "\n"
        f"Memory references: {stats.mem_refs}\n"
        f"Page faults: {stats.page_faults}\n"
        f"Swap ins: {stats.swap_ins}\n"
        f"Swap outs: {stats.swap_outs}\n"
    )


class ProgressBar:
    """A one-line progress bar redrawn only when it grows."""

    def __init__(self, out: IO[str] | None = None, width: int = PROGRESS_BAR_WIDTH) -> None:
        self.out = out if out is not None else sys.stdout
        self.width = width
        self._drawn = 0

    def update(self, percent: int) -> None:
        """Redraw the bar for ``percent`` if it has advanced."""
        filled = self.width * percent // 100
        if filled <= self._drawn:
            return
        self._drawn = filled
        bar = "." * filled + " " * max(self.width - filled, 0)
        self.out.write(f"Progress [{bar}] {percent:3d}%\r")
        self.out.flush()


class MemorySimulator:
    """Resolves logical addresses through an inverted page table."""

    def __init__(self, frame_bits: int, num_frames: int, scheme: Scheme) -> None:
        if frame_bits <= 0:
            raise ValueError("frame size must be positive")
        if num_frames <= 0:
            raise ValueError("number of frames must be positive")
        self.frame_bits = frame_bits
        self.num_frames = num_frames
        self.scheme = scheme
        self.page_table = [PageTableEntry() for _ in range(num_frames)]
        self.stats = Stats()
        self._clock = 0
        self._fifo_index = 0
        self._clock_hand = 0

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def _victim_fifo(self) -> int:
        victim = self._fifo_index
        self._fifo_index = (self._fifo_index + 1) % self.num_frames
        return victim

    def _victim_lru(self) -> int:
        return min(range(self.num_frames), key=lambda i: self.page_table[i].timestamp)

    def _victim_clock(self) -> int:
        while True:
            hand = self._clock_hand
            self._clock_hand = (hand + 1) % self.num_frames
            entry = self.page_table[hand]
            if not entry.reference:
                return hand
            entry.reference = False

    def _select_victim(self, logical: int) -> int:
        if self.scheme in (Scheme.FIFO, Scheme.OPTIMAL):
            return self._victim_fifo()
        if self.scheme is Scheme.LRU:
            return self._victim_lru()
        if self.scheme is Scheme.CLOCK:
            return self._victim_clock()
        raise AddressError(logical)

    def _load(self, frame: int, page: int, write: bool) -> None:
        entry = self.page_table[frame]
        entry.page_num = page
        entry.free = False
        entry.dirty = write
        entry.timestamp = self._tick()
        entry.reference = True
        self.stats.swap_ins += 1

    def resolve(self, logical: int, write: bool = False) -> int:
        """Map ``logical`` to a physical address, paging in as needed."""
        page = logical >> self.frame_bits
        offset = logical & ((1 << self.frame_bits) - 1)

        for frame, entry in enumerate(self.page_table):
            if not entry.free and entry.page_num == page:
                entry.timestamp = self._tick()
                entry.reference = True
                if write:
                    entry.dirty = True
                return (frame << self.frame_bits) | offset

        self.stats.page_faults += 1

        frame = next((i for i, e in enumerate(self.page_table) if e.free), None)
        if frame is None:
            frame = self._select_victim(logical)
            if self.page_table[frame].dirty:
                self.stats.swap_outs += 1
        self._load(frame, page, write)
        return (frame << self.frame_bits) | offset

    def run(self, lines: Iterable[str]) -> Stats:
        """Process a reference trace; lines without ``:`` are ignored."""
        for line_num, line in enumerate(lines, start=1):
            if ":" not in line:
                continue
            match = _REFERENCE.match(line)
            if match is None:
                raise ValueError(f"malformed memory reference at line {line_num}")
            address = int(match.group(2), 16)
            try:
                self.resolve(address, match.group(1) == "W")
            except AddressError as exc:
                raise AddressError(exc.address, line_num) from None
            self.stats.mem_refs += 1
        return self.stats


def _atoi(text: str) -> int:
    match = _INTEGER.match(text)
    return int(match.group(1)) if match else 0


def _tracked(handle: IO[str], size: int, bar: ProgressBar) -> Iterator[str]:
    position = 0
    for line in handle:
        position += len(line.encode("utf-8"))
        yield line
        bar.update(position * 100 // size)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: simulate a memory reference trace."""
    args = list(sys.argv[1:] if argv is None else argv)
    scheme = Scheme.NONE
    file_name: str | None = None
    frame_bits = 0
    num_frames = 0
    show_progress = False

    for arg in args:
        if arg.startswith("--replace="):
            scheme = parse_scheme(arg.partition("=")[2])
        elif arg.startswith("--file="):
            file_name = arg.partition("=")[2]
        elif arg.startswith("--framesize="):
            frame_bits = _atoi(arg.partition("=")[2])
        elif arg.startswith("--numframes="):
            num_frames = _atoi(arg.partition("=")[2])
        elif arg == "--progress":
            show_progress = True

    size = 0
    handle: IO[str] | None = None
    if file_name is None:
        handle = sys.stdin
    elif os.path.isfile(file_name):
        size = os.path.getsize(file_name)
        handle = open(file_name, encoding="utf-8")

    if scheme is Scheme.NONE or frame_bits <= 0 or num_frames <= 0 or handle is None:
        if handle is not None and handle is not sys.stdin:
            handle.close()
        print(USAGE, file=sys.stderr)
        return 1

    simulator = MemorySimulator(frame_bits, num_frames, scheme)
    try:
        lines: Iterable[str] = handle
        if show_progress and size > 0:
            lines = _tracked(handle, size, ProgressBar())
        stats = simulator.run(lines)
    except AddressError as exc:
        print(
            f"\nSimulator error: cannot resolve address {exc.address:#x} at line {exc.line}",
            file=sys.stderr,
        )
        return 1
    except ValueError as exc:
        print(f"\nSimulator error: {exc}", file=sys.stderr)
        return 1
    finally:
        if handle is not sys.stdin:
            handle.close()

    sys.stdout.write(format_report(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())