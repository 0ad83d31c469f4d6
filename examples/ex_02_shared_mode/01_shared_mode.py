"""Shared mode: every object is built once per container.

Shared mode is on by default. Intermediate dependencies are cached too, so two
services needing the same dependency receive the same object. A single call can
opt out with ``shared=False``; nothing it builds is cached.
"""

from __future__ import annotations

from graphwire import Container, NotFoundError


class Clock:
    pass


class Scheduler:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


class Auditor:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock


def main() -> None:
    container = Container(Clock, Scheduler, Auditor)

    scheduler = container.build(Scheduler)
    auditor = container.build(Auditor)
    print(f"same_clock={scheduler.clock is auditor.clock}")  # => same_clock=True
    print(f"cached_clock={container.get(Clock) is scheduler.clock}")  # => cached_clock=True

    transient = container.build(Scheduler, shared=False)
    print(f"fresh_scheduler={transient is not scheduler}")  # => fresh_scheduler=True

    non_shared = Container(Clock, Scheduler, Auditor, shared_mode=False)
    non_shared.build(Scheduler)
    try:
        non_shared.get(Clock)
    except NotFoundError as error:
        error_name = type(error).__name__
    print(f"non_shared_get={error_name}")  # => non_shared_get=NotFoundError


if __name__ == "__main__":
    main()
