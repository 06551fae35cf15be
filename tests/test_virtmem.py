import io

import pytest

from ossims.virtmem import (
    AddressError,
    MemorySimulator,
    ProgressBar,
    Scheme,
    Stats,
    format_report,
    main,
    parse_scheme,
)

BITS = 4
PAGE = 1 << BITS


def addr(page, offset=0):
    return page * PAGE + offset


@pytest.mark.parametrize(
    "name, scheme",
    [
        ("fifo", Scheme.FIFO),
        ("lru", Scheme.LRU),
        ("clock", Scheme.CLOCK),
        ("optimal", Scheme.OPTIMAL),
        ("random", Scheme.NONE),
    ],
)
def test_parse_scheme(name, scheme):
    assert parse_scheme(name) is scheme


def test_format_report():
    stats = Stats(mem_refs=5, page_faults=6, swap_ins=7, swap_outs=8)
    assert format_report(stats) == (
        "\nMemory references: 5\nPage faults: 6\nSwap ins: 7\nSwap outs: 8\n"
    )


@pytest.mark.parametrize("bits, frames", [(0, 4), (4, 0), (-1, 2)])
def test_invalid_configuration(bits, frames):
    with pytest.raises(ValueError):
        MemorySimulator(bits, frames, Scheme.FIFO)


@pytest.mark.parametrize("scheme", [Scheme.FIFO, Scheme.LRU, Scheme.CLOCK, Scheme.OPTIMAL])
def test_resolve_preserves_offset_and_stays_in_memory(scheme):
    sim = MemorySimulator(BITS, 3, scheme)
    for page in [0, 5, 2, 9, 5, 0, 7, 2, 2, 11]:
        logical = addr(page, page % PAGE)
        physical = sim.resolve(logical)
        assert physical & (PAGE - 1) == logical & (PAGE - 1)
        assert physical >> BITS < 3


def test_hit_returns_same_frame_without_fault():
    sim = MemorySimulator(BITS, 2, Scheme.FIFO)
    first = sim.resolve(addr(3, 1))
    faults = sim.stats.page_faults
    assert sim.resolve(addr(3, 7)) >> BITS == first >> BITS
    assert sim.stats.page_faults == faults


def test_free_frames_are_filled_in_order():
    sim = MemorySimulator(BITS, 3, Scheme.FIFO)
    frames = [sim.resolve(addr(p)) >> BITS for p in (10, 20, 30)]
    assert frames == [0, 1, 2]
    assert sim.stats.swap_ins == sim.stats.page_faults == len(frames)


def test_fifo_evicts_oldest_loaded():
    sim = MemorySimulator(BITS, 2, Scheme.FIFO)
    sim.resolve(addr(0))
    sim.resolve(addr(1))
    sim.resolve(addr(0))  # hit, does not affect FIFO order
    sim.resolve(addr(2))
    assert sim.page_table[0].page_num == 2
    assert sim.page_table[1].page_num == 1


def test_lru_evicts_least_recent():
    sim = MemorySimulator(BITS, 2, Scheme.LRU)
    sim.resolve(addr(0))
    sim.resolve(addr(1))
    sim.resolve(addr(0))
    sim.resolve(addr(2))
    assert sim.page_table[0].page_num == 0
    assert sim.page_table[1].page_num == 2


def test_clock_gives_second_chance():
    sim = MemorySimulator(BITS, 2, Scheme.CLOCK)
    sim.resolve(addr(0))
    sim.resolve(addr(1))
    sim.resolve(addr(2))
    assert sim.page_table[0].page_num == 2
    assert sim.page_table[1].page_num == 1
    assert sim.page_table[1].reference is False


def test_dirty_victim_is_swapped_out():
    sim = MemorySimulator(BITS, 1, Scheme.FIFO)
    sim.resolve(addr(0), write=True)
    sim.resolve(addr(1))
    assert sim.stats.swap_outs == 1
    sim.resolve(addr(2))
    assert sim.stats.swap_outs == 1


def test_write_on_hit_marks_dirty():
    sim = MemorySimulator(BITS, 1, Scheme.LRU)
    sim.resolve(addr(4))
    assert sim.page_table[0].dirty is False
    sim.resolve(addr(4), write=True)
    assert sim.page_table[0].dirty is True


def test_no_scheme_fails_when_memory_full():
    sim = MemorySimulator(BITS, 1, Scheme.NONE)
    sim.resolve(addr(0))
    with pytest.raises(AddressError) as info:
        sim.resolve(addr(1))
    assert info.value.address == addr(1)


def test_run_counts_references_and_ignores_other_lines():
    sim = MemorySimulator(BITS, 2, Scheme.FIFO)
    lines = ["# header\n", "R: 0x10\n", "W: 0x20\n", "\n", "R: 0x10\n"]
    stats = sim.run(lines)
    assert stats.mem_refs == 3
    assert stats.page_faults == 2
    assert sim.page_table[1].dirty is True


def test_run_reports_line_of_unresolvable_address():
    sim = MemorySimulator(BITS, 1, Scheme.NONE)
    with pytest.raises(AddressError) as info:
        sim.run(["R: 0x0\n", "skip\n", "R: 0x100\n"])
    assert info.value.line == 3
    assert info.value.address == 0x100


def test_run_rejects_malformed_reference():
    sim = MemorySimulator(BITS, 1, Scheme.FIFO)
    with pytest.raises(ValueError):
        sim.run(["R: zz\n"])


def test_progress_bar_draws_only_when_growing():
    out = io.StringIO()
    bar = ProgressBar(out, width=10)
    bar.update(50)
    assert out.getvalue() == "Progress [.....     ]  50%\r"
    bar.update(50)
    bar.update(55)
    assert out.getvalue().count("Progress") == 1
    bar.update(100)
    assert out.getvalue().endswith("Progress [..........] 100%\r")


def test_main_runs_trace(tmp_path, capsys):
    trace = tmp_path / "trace.txt"
    trace.write_text("R: 0x0\nW: 0x10\nR: 0x20\nR: 0x0\n")
    code = main([
        "--framesize=4", "--numframes=2", "--replace=lru", f"--file={trace}",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "Memory references: 4\n" in out
    assert out.startswith("\nMemory references")


def test_main_with_progress(tmp_path, capsys):
    trace = tmp_path / "trace.txt"
    trace.write_text("R: 0x0\nR: 0x10\n")
    code = main([
        "--framesize=4", "--numframes=2", "--replace=fifo", "--progress", f"--file={trace}",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "100%\r" in out


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["--framesize=4", "--numframes=2", "--replace=bogus"],
        ["--framesize=x", "--numframes=2", "--replace=fifo"],
        ["--framesize=4", "--numframes=0", "--replace=fifo"],
    ],
)
def test_main_usage_errors(args, capsys):
    assert main(args) == 1
    assert "usage" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.txt"
    code = main(["--framesize=4", "--numframes=2", "--replace=fifo", f"--file={missing}"])
    assert code == 1
    assert "usage" in capsys.readouterr().err