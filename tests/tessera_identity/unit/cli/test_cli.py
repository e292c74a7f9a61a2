"""Tests for the tessera maintenance CLI."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import patch
from uuid import uuid4

import pytest
from typer.testing import CliRunner

from tessera_config import Settings
from tessera_identity.factory import build_repositories
from tessera_identity.presentation.cli.app import app
from tests.shared.fixtures import (
    TEST_JWT_SECRET,
    InMemoryStoreClient,
    TestTokenFactory,
)

CLI_MODULE = "tessera_identity.presentation.cli.app"

runner = CliRunner()


def _settings(**overrides) -> Settings:
    values = {"jwt_secret_key": TEST_JWT_SECRET, **overrides}
    return Settings(_env_file=None, **values)


class TestCli:
    """Commands run against an in-memory store."""

    def setup_method(self):
        self.store = InMemoryStoreClient()
        self.settings = _settings()
        self.repositories = build_repositories(self.store, self.settings)

        @asynccontextmanager
        async def open_store(settings):
            yield self.store

        self._patches = [
            patch(f"{CLI_MODULE}.get_settings", return_value=self.settings),
            patch(f"{CLI_MODULE}.open_store", open_store),
            patch(f"{CLI_MODULE}.configure_logging"),
        ]
        for p in self._patches:
            p.start()

    def teardown_method(self):
        for p in self._patches:
            p.stop()

    def test_generate_secret(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        line = next(
            line for line in result.output.splitlines() if "JWT_SECRET_KEY=" in line
        )
        assert len(line.split("=", 1)[1].strip()) >= 32

    @pytest.mark.asyncio
    async def test_cleanup_tokens(self):
        user_id = uuid4()
        tokens = self.repositories.ephemeral_tokens
        await tokens.add(TestTokenFactory.valid(user_id))
        await tokens.add(TestTokenFactory.expired(user_id, token="old-1"))
        await tokens.add(TestTokenFactory.expired(user_id, token="old-2"))

        result = await _invoke_in_thread(["tokens", "cleanup"])

        assert result.exit_code == 0
        assert "Removed 2 expired token(s)" in result.output
        assert len(self.store.tables["TemporaryTokens"]) == 1

    @pytest.mark.asyncio
    async def test_list_roles(self):
        user_id = uuid4()
        await self.repositories.user_roles.add_role(user_id, "auditor")
        await self.repositories.user_roles.add_role(user_id, "admin")

        result = await _invoke_in_thread(["users", "roles", str(user_id)])

        assert result.exit_code == 0
        assert "admin" in result.output
        assert "auditor" in result.output

    def test_list_roles_empty(self):
        user_id = uuid4()

        result = runner.invoke(app, ["users", "roles", str(user_id)])

        assert result.exit_code == 0
        assert "has no roles" in result.output

    def test_list_roles_rejects_bad_id(self):
        result = runner.invoke(app, ["users", "roles", "not-a-uuid"])

        assert result.exit_code == 1
        assert "Not a valid user id" in result.output


class TestCliConfiguration:
    """Startup failures on invalid configuration."""

    def test_invalid_settings_exit_with_error(self):
        def broken_settings():
            return _settings(jwt_secret_key="short")

        with patch(f"{CLI_MODULE}.get_settings", broken_settings):
            result = runner.invoke(app, ["tokens", "cleanup"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "jwt_secret_key" in result.output


async def _invoke_in_thread(args: list[str]):
    """Run a command that calls asyncio.run outside the test's event loop."""
    return await asyncio.to_thread(runner.invoke, app, args)
