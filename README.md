# ossims

Two small operating-systems simulators. Each one can be run from the
command line or used as a library.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Train crossing controller

`ossims-trains` simulates trains that load at a station and then share one
main track. Each train runs in its own thread. A scheduler thread gives the
track to one waiting train at a time.

The input file lists one train per line: a direction letter, a loading time
and a crossing time. Both times are in tenths of a second.

```
e 10 6
W 6 7
E 3 10
```

`e` or `E` means eastbound, and any other letter means westbound. An
upper-case letter marks a high-priority train. Trains are numbered from 0
in the order they appear in the file. Reading stops at the first entry that
cannot be parsed, or after 75 trains.

```
ossims-trains trains.txt
```

You can also run it as `python -m ossims.trains trains.txt`.

Each event is printed with a timestamp of the form `hh:mm:ss.t`:

```
00:00:00.3 Train  2 is ready to go East
00:00:00.3 Train  2 is ON the main track going East
00:00:01.3 Train  2 is OFF the main track after going East
```

The scheduler picks the next train by these rules:

- A high-priority train goes before a low-priority one.
- Among trains of equal priority going the same way, the train that was
  ready first goes first. If two are ready at the same moment, the one
  listed first in the file goes first.
- Among trains of equal priority going opposite ways, the train going
  against the direction of the last train to cross goes first. If no train
  has crossed yet, the westbound train goes first.
- After two trains in a row have crossed in the same direction, a waiting
  train going the other way goes next, if there is one.

In Python, the module `ossims.trains` provides:

- `parse_trains(text)`, which returns a list of `Train` objects.
- `select_next_train(waiting, last_direction, consecutive)`, which applies
  the scheduling rules to a list of waiting trains.
- `format_sim_time(elapsed)`, which formats a time in seconds as `hh:mm:ss.t`.
- `Controller(trains, out, time_unit)`. Its `run()` method runs the
  simulation and returns the trains in the order they crossed.
  `time_unit` is the number of seconds per time unit and defaults to `0.1`.

```python
import io
from ossims.trains import Controller, parse_trains

trains = parse_trains("e 1 1\nW 1 1\n")
out = io.StringIO()
order = Controller(trains, out, 0.01).run()
print(out.getvalue())
print([t.id for t in order])
```

## Virtual memory simulator

`ossims-virtmem` reads a trace of memory references and simulates paging
with a fixed number of physical frames. Each trace line looks like
`R: 1a2b3c` or `W: 1a2b3c`, where the address is in hexadecimal and `W`
marks a write. Lines without a colon are skipped.

```
ossims-virtmem --framesize=12 --numframes=64 --replace=lru --file=trace.txt
```

You can also run it as `python -m ossims.virtmem ...`.

Options:

- `--framesize=<m>`: the page size is 2**m bytes.
- `--numframes=<n>`: the number of physical frames.
- `--replace={fifo|lru|clock|optimal}`: the page replacement scheme.
  `optimal` currently behaves the same as `fifo`.
- `--file=<filename>`: the trace file. If this option is not given, the
  trace is read from standard input.
- `--progress`: show a progress bar. This works only with `--file`.

If the scheme is missing or unknown, the frame size or the frame count is
not positive, or the file cannot be found, the command prints a usage line
and exits with status 1.

When the run finishes, the simulator prints a report. The report begins
with a blank line:

```
Memory references: 1000
Page faults: 120
Swap ins: 120
Swap outs: 37
```

A swap-out is counted each time a dirty page is evicted.

In Python:

```python
from ossims.virtmem import MemorySimulator, Scheme, format_report

sim = MemorySimulator(12, 4, Scheme.CLOCK)
sim.run(["R: 1000", "W: 2004", "R: 1008"])
print(format_report(sim.stats))
```

- `MemorySimulator.resolve(logical, write)` maps a logical address to a
  physical address and loads the page if needed.
- `MemorySimulator.run(lines)` processes a trace and returns its `Stats`.
  It raises `AddressError` if an address cannot be resolved, which happens
  when memory is full and the scheme is `Scheme.NONE`. It raises
  `ValueError` for a line that contains a colon but is not a valid
  reference.
- `MemorySimulator` raises `ValueError` if the frame size or the frame
  count is not positive.
- `parse_scheme(name)` returns the matching `Scheme`, or `Scheme.NONE` if
  the name is not recognised.
- `ProgressBar(out, width)` draws the progress bar. Its `update(percent)`
  method redraws the bar only when it has grown.