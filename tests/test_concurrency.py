"""
Tests for bounded_map: in-flight cap, input-order results, failure propagation.
"""

from __future__ import annotations

import asyncio

import pytest

from txgraph.core.concurrency import bounded_map


class _Probe:
    def __init__(self) -> None:
        self.in_flight = 0
        self.max_in_flight = 0
        self.started: list[int] = []

    async def call(self, item: int) -> int:
        self.started.append(item)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # later items finish first
            await asyncio.sleep(0.001 * (10 - item % 10))
            return item * 2
        finally:
            self.in_flight -= 1


@pytest.mark.asyncio
@pytest.mark.parametrize("cap", [1, 2, 4, 20])
async def test_bounded_map_respects_cap_and_order(cap):
    probe = _Probe()
    items = list(range(30))
    out = await bounded_map(probe.call, items, cap)
    assert out == [i * 2 for i in items]
    assert 1 <= probe.max_in_flight <= cap
    assert sorted(probe.started) == items


@pytest.mark.asyncio
async def test_bounded_map_reaches_cap_when_enough_work():
    probe = _Probe()
    await bounded_map(probe.call, range(12), 4)
    assert probe.max_in_flight == 4


@pytest.mark.asyncio
async def test_bounded_map_empty_input():
    probe = _Probe()
    assert await bounded_map(probe.call, [], 3) == []
    assert probe.started == []


@pytest.mark.asyncio
async def test_bounded_map_rejects_zero_concurrency():
    probe = _Probe()
    with pytest.raises(ValueError):
        await bounded_map(probe.call, [1], 0)


@pytest.mark.asyncio
async def test_bounded_map_failure_propagates_and_cancels_rest():
    finished: list[int] = []

    async def _work(item: int) -> int:
        if item == 1:
            raise RuntimeError("boom")
        await asyncio.sleep(0.05)
        finished.append(item)
        return item

    with pytest.raises(RuntimeError, match="boom"):
        await bounded_map(_work, range(6), 2)
    await asyncio.sleep(0.1)
    assert len(finished) < 5
