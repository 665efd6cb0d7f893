# tests/test_id_generator.py

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from taskm.tasks.id_generator import IdGenerator


def test_seeded_from_max_observed_id() -> None:
    gen = IdGenerator(41)
    assert gen.next_id() == 42
    assert gen.next_id() == 43
    assert IdGenerator().next_id() == 1


def test_advance_only_moves_forward() -> None:
    gen = IdGenerator(10)  # next = 11

    gen.advance(5)
    assert gen.peek() == 11

    gen.advance(10)
    assert gen.peek() == 11

    gen.advance(11)
    assert gen.peek() == 12

    gen.advance(100)
    assert gen.next_id() == 101


def test_concurrent_next_id_has_no_duplicates_or_gaps() -> None:
    seed = 7
    callers, per_caller = 32, 250
    gen = IdGenerator(seed)

    def grab(_: int) -> list[int]:
        return [gen.next_id() for _ in range(per_caller)]

    with ThreadPoolExecutor(max_workers=callers) as pool:
        chunks = list(pool.map(grab, range(callers)))

    ids = [i for chunk in chunks for i in chunk]
    total = callers * per_caller
    assert len(set(ids)) == total
    assert sorted(ids) == list(range(seed + 1, seed + 1 + total))
