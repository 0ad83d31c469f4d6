"""Errors: what goes wrong and where.

Registration errors surface when the container is created; lookup and cycle
errors surface when building. Exceptions raised by factories propagate as-is.
"""

from __future__ import annotations

from graphwire import (
    CircularDependencyError,
    Container,
    NotFoundError,
    ProviderDuplicatedError,
    ProviderInvalidError,
)


class Mailer:
    pass


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


class SmtpDownError(Exception):
    pass


SMTP_DOWN = SmtpDownError("smtp is down")


def make_mailer() -> Mailer:
    raise SMTP_DOWN


def copy(first: str, second: str) -> bytes:
    return (first + second).encode()


def main() -> None:
    try:
        Container(copy)
    except ProviderInvalidError as error:
        invalid = type(error).__name__
    print(f"same_parameter_types={invalid}")  # => same_parameter_types=ProviderInvalidError

    try:
        Container(Mailer, make_mailer)
    except ProviderDuplicatedError as error:
        duplicated = type(error).__name__
    print(f"two_mailers={duplicated}")  # => two_mailers=ProviderDuplicatedError

    try:
        Container(Chicken).build(Chicken)
    except NotFoundError as error:
        missing = error.key.__name__
    print(f"missing={missing}")  # => missing=Egg

    try:
        Container(Chicken, Egg).build(Chicken)
    except CircularDependencyError as error:
        cycle_at = error.key.__name__
    print(f"cycle_at={cycle_at}")  # => cycle_at=Chicken

    try:
        Container(make_mailer).build(Mailer)
    except SmtpDownError as error:
        same_error = error is SMTP_DOWN
    print(f"factory_error_identity={same_error}")  # => factory_error_identity=True


if __name__ == "__main__":
    main()
