"""Tests for attrs providers and records."""

import attrs
import pytest

from graphwire.container import Container
from graphwire.exceptions import NotFoundError


@attrs.define
class SmtpConfig:
    host: str
    port: int


@attrs.frozen
class MailerConfig:
    smtp: SmtpConfig
    sender: bytes
    _password: float = 0.0


@attrs.define
class Mailer:
    smtp: SmtpConfig
    sender: bytes


class TestAttrsAsCallable:
    def test_attrs_class_is_built_from_its_attributes(self) -> None:
        smtp = SmtpConfig(host="localhost", port=25)
        container = Container(Mailer)

        mailer = container.build(Mailer, overwrites={SmtpConfig: smtp, bytes: b"me@example.org"})

        assert mailer.smtp is smtp
        assert mailer.sender == b"me@example.org"


class TestAttrsAsRecord:
    def test_record_attributes_feed_services(self) -> None:
        config = MailerConfig(smtp=SmtpConfig(host="mail", port=587), sender=b"noreply")
        container = Container(config, Mailer)

        mailer = container.build(Mailer)

        assert mailer.smtp is config.smtp
        assert mailer.sender == b"noreply"
        assert container.build(int) == 587

    def test_private_attributes_are_not_provided(self) -> None:
        container = Container(MailerConfig(smtp=SmtpConfig("mail", 25), sender=b"x", password=1.0))

        with pytest.raises(NotFoundError):
            container.build(float)

    def test_mutable_record_changes_are_observed(self) -> None:
        smtp = SmtpConfig(host="mail", port=25)
        container = Container(smtp)

        smtp.port = 2525

        assert container.build(int) == 2525
