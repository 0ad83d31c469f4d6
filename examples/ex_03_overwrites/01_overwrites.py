"""Call-scoped overwrites and ambient values.

``overwrites`` substitutes a value for a key during one call only.
``build_with_context`` does the same for an ambient value such as the current
request, which any provider can then declare as an ordinary parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from graphwire import Container


@dataclass
class Request:
    user: str


class Greeting:
    def __init__(self, text: str) -> None:
        self.text = text


def make_greeting(request: Request, template: str) -> Greeting:
    return Greeting(template.format(user=request.user))


def make_template() -> str:
    return "Hello, {user}!"


def main() -> None:
    container = Container(make_greeting, make_template)

    greeting = container.build_with_context(Request(user="ada"), Greeting, shared=False)
    print(greeting.text)  # => Hello, ada!

    greeting = container.build_with_context(
        Request(user="bob"),
        Greeting,
        shared=False,
        overwrites={str: "Hi {user}"},
    )
    print(greeting.text)  # => Hi bob

    has_request = Request in container.registry
    print(f"request_registered={has_request}")  # => request_registered=False


if __name__ == "__main__":
    main()
