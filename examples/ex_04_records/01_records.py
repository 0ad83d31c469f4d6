"""Records: every exported field of a record instance becomes a provider.

Dataclass, attrs, pydantic and NamedTuple instances are flattened, nested
records included, so factories can depend on individual settings. Fields are
read from the live record on each build.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from pydantic import BaseModel

from graphwire import Container

DatabaseUrl = NewType("DatabaseUrl", str)
PoolSize = NewType("PoolSize", int)


class DatabaseSettings(BaseModel):
    url: DatabaseUrl
    pool_size: PoolSize


@dataclass
class Settings:
    database: DatabaseSettings
    debug: bool
    _secret: str = "hidden"


class Engine:
    def __init__(self, url: DatabaseUrl, pool_size: PoolSize) -> None:
        self.url = url
        self.pool_size = pool_size


def main() -> None:
    settings = Settings(
        database=DatabaseSettings(url=DatabaseUrl("sqlite://"), pool_size=PoolSize(5)),
        debug=True,
    )
    container = Container(settings, Engine, shared_mode=False)

    engine = container.build(Engine)
    print(f"url={engine.url} pool_size={engine.pool_size}")  # => url=sqlite:// pool_size=5

    settings.database.pool_size = PoolSize(10)
    print(f"pool_size={container.build(Engine).pool_size}")  # => pool_size=10

    print(f"debug={container.build(bool)}")  # => debug=True
    print(f"secret_registered={str in container.registry}")  # => secret_registered=False


if __name__ == "__main__":
    main()
