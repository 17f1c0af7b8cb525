"""Shared pytest fixtures for transport, configuration and CLI tests.

- HTTP is exercised through ``httpx.MockTransport``; no test touches the network
- CLI tests inject services via ``AppServices`` instead of patching modules
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import lib_log_rich.runtime
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from freesend.domain.message import Message

if TYPE_CHECKING:
    from freesend.adapters.memory.mail import TransportSpy
    from freesend.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

TEST_ENDPOINT = "https://freesend.test/api/send-email"


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== HTTP ========================


def _empty_requests() -> list[httpx.Request]:
    return []


@dataclass
class RecordingApi:
    """Fake Freesend API built on ``httpx.MockTransport``.

    Every request is recorded; the response is ``status_code`` with
    ``body``, or ``error`` is raised instead to simulate a network failure.
    """

    status_code: int = 200
    body: str = '{"success":true}'
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=_empty_requests)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def recording_api() -> RecordingApi:
    """Provide a fake API answering 200 unless reconfigured by the test."""
    return RecordingApi()


@pytest.fixture
def api_client(recording_api: RecordingApi) -> Iterator[httpx.Client]:
    """Provide an httpx client routed to ``recording_api``."""
    client = recording_api.client()
    try:
        yield client
    finally:
        client.close()


@pytest.fixture
def simple_message() -> Message:
    """A minimal valid message: one sender, one recipient, text body."""
    return Message.create(
        from_address="sender@example.com",
        to="recipient@example.com",
        subject="Hello",
        text="Hello there",
    )


# ======================== Logging ========================


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def transport_log_records() -> Iterator[list[logging.LogRecord]]:
    """Collect records emitted by the transport logger.

    The handler sits on the transport logger itself, so records are
    captured no matter how the root logger is configured.
    """
    logger = logging.getLogger("freesend.adapters.mail.transport")
    handler = _ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


# ======================== CLI ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from freesend.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def fresh_logging_runtime() -> Iterator[None]:
    """Start the test with lib_log_rich shut down and shut it down again afterwards."""
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()
    yield
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test."""
    from freesend.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts, without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def inject_services() -> Callable[..., Callable[[], AppServices]]:
    """Return a factory building in-memory services with selected ports replaced.

    Commands bind lib_log_rich context, so the production ``init_logging``
    is wired in; every other port stays in memory unless overridden.

    Example:
        def test_deploy(cli_runner, inject_services):
            factory = inject_services(deploy_configuration=lambda **_: [Path("/x")])
            cli_runner.invoke(cli, ["config-deploy", "--target", "user"], obj=factory)
    """
    from freesend.composition import AppServices, build_production, build_testing

    def _inject(**overrides: Any) -> Callable[[], AppServices]:
        overrides.setdefault("init_logging", build_production().init_logging)
        services = replace(build_testing(), **overrides)
        return lambda: services

    return _inject


@dataclass
class MailCliContext:
    """Services factory plus the spy that records what the CLI sent."""

    factory: Callable[[], Any]
    spy: TransportSpy
    config: Config


@pytest.fixture
def mail_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], MailCliContext]:
    """Create a mail CLI context from a configuration dict.

    The configuration is served by an injected ``get_config``; sending goes
    to a fresh :class:`TransportSpy`; the config loader ignores the process
    environment.

    Example:
        def test_send(cli_runner, mail_cli_context):
            ctx = mail_cli_context({"freesend": {"api_key": "k"}})
            cli_runner.invoke(cli, ["send", "--to", "a@b.c", ...], obj=ctx.factory)
            assert ctx.spy.payloads[0]["to"] == "a@b.c"
    """
    from freesend.adapters.memory.mail import TransportSpy as TransportSpyImpl
    from freesend.composition import build_production, build_testing

    def _create(config_data: dict[str, Any]) -> MailCliContext:
        spy = TransportSpyImpl()
        config = Config(config_data, {})
        services = build_testing(spy=spy)

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = replace(
            services,
            get_config=_fake_get_config,
            init_logging=build_production().init_logging,
        )
        return MailCliContext(factory=lambda: test_services, spy=spy, config=config)

    return _create


@pytest.fixture
def configured_mail_cli(mail_cli_context: Callable[[dict[str, Any]], MailCliContext]) -> MailCliContext:
    """A mail CLI context with an API key and a test endpoint configured."""
    return mail_cli_context(
        {
            "freesend": {"api_key": "fs_test_key", "endpoint": TEST_ENDPOINT},
            "mailers": {
                "default": {"transport": "freesend"},
                "alerts": {"transport": "freesend", "key": "fs_alerts_key"},
                "smtp": {"transport": "smtp"},
            },
        }
    )
