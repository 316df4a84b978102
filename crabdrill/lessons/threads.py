"""Solutions to the shared-ownership and channel lessons."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol


def offset_sums(numbers: Sequence[int], workers: int = 8) -> list[int]:
    """Sum every workers-th number, one offset per thread; index i holds offset i."""
    if workers <= 0:
        raise ValueError("workers must be positive")
    shared = tuple(numbers)

    def sum_offset(offset: int) -> int:
        total = sum(n for n in shared if n % workers == offset)
        print(f"Sum of offset {offset} is {total}")
        return total

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(sum_offset, range(workers)))


@dataclass(frozen=True)
class Queue:
    """Ten values split in two halves, sent with a pause between sends."""

    length: int = 10
    first_half: tuple[int, ...] = (1, 2, 3, 4, 5)
    second_half: tuple[int, ...] = (6, 7, 8, 9, 10)
    interval: float = 1.0


class _Sender(Protocol):
    def put(self, item: int) -> None: ...


def _send_all(label: str, values: Sequence[int], channel: _Sender, interval: float) -> None:
    print(f"in {label}")
    for value in values:
        print(f"sending {value!r}")
        channel.put(value)
        time.sleep(interval)


def send_tx(queue: Queue, channel: _Sender) -> tuple[threading.Thread, threading.Thread]:
    """Start two threads sending each half of the queue into the channel."""
    senders = (
        threading.Thread(
            target=_send_all, args=("1", queue.first_half, channel, queue.interval)
        ),
        threading.Thread(
            target=_send_all, args=("2", queue.second_half, channel, queue.interval)
        ),
    )
    for sender in senders:
        sender.start()
    return senders