"""Dependency graphs: inspect what a build needs without building anything.

``resolve`` walks provider metadata only, so it works even when a runtime value
would be missing at build time.
"""

from __future__ import annotations

from graphwire import Container, DependencyGraph


class Config:
    pass


class Cache:
    def __init__(self, config: Config) -> None:
        self.config = config


class Repository:
    def __init__(self, config: Config, cache: Cache) -> None:
        self.config = config
        self.cache = cache


def render(graph: DependencyGraph, indent: int = 0) -> list[str]:
    lines = [" " * indent + graph.key.__name__]
    for dependency in graph.dependencies:
        lines.extend(render(dependency, indent + 2))
    return lines


def fail() -> Config:
    msg = "Config is only available at runtime"
    raise RuntimeError(msg)


def main() -> None:
    container = Container(fail, Cache, Repository)
    graph = container.resolve(Repository)

    print(" | ".join(render(graph)))  # => Repository |   Config |   Cache |     Config
    print(f"depth={graph.depth}")  # => depth=3
    print(f"nodes={len(list(graph.keys()))}")  # => nodes=4


if __name__ == "__main__":
    main()
