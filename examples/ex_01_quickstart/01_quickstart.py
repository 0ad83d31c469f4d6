"""Quickstart: build a whole object graph from typed factories.

Register plain classes and functions, build only the top-level service, and
see how graphwire builds the full dependency chain for you.
"""

from __future__ import annotations

from graphwire import Container


class Database:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def make_dsn() -> str:
    return "postgresql://localhost/app"


def main() -> None:
    container = Container(make_dsn, Database, UserRepository, UserService)
    service = container.build(UserService)

    print(f"dsn={service.repository.database.dsn}")  # => dsn=postgresql://localhost/app

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()
