"""Tests for the credential gate."""

from unittest.mock import MagicMock

import httpx
import pytest

from conftest import FakeLoginProvider, FakeTokenSource
from ghgate.auth.gate import CredentialGate
from ghgate.auth.reauth import ESSENTIALS_CONNECT, ReauthTrigger
from ghgate.exceptions import (
    AuthorizationFailure,
    NoCredentialError,
    NoReauthTargetAvailableError,
)


def make_gate(registry, store, tokens=None):
    """Gate whose login provider hands out ``tokens`` one per dispatch."""
    provider = None
    if tokens is not None:
        provider = FakeLoginProvider(store, tokens)
        registry.register(ESSENTIALS_CONNECT.namespace, ESSENTIALS_CONNECT.command_id, provider)
    return CredentialGate(store, ReauthTrigger(registry)), provider


class TestMissingToken:
    """Tests for when the store holds no token."""

    def test_no_provider_surfaces_reauth_error(self, registry):
        """Missing provider wins over missing credential."""
        store = FakeTokenSource(None)
        gate, _ = make_gate(registry, store)
        operation = MagicMock()

        with pytest.raises(NoReauthTargetAvailableError):
            gate.ensure(operation)

        operation.assert_not_called()

    def test_login_without_result_raises_no_credential(self, registry):
        """Provider ran but the store is still empty."""
        store = FakeTokenSource(None)
        gate, provider = make_gate(registry, store, tokens=[None])
        operation = MagicMock()

        with pytest.raises(NoCredentialError):
            gate.ensure(operation)

        assert provider.calls == 1
        operation.assert_not_called()

    def test_login_provides_token(self, registry):
        """Token written by the provider is used."""
        store = FakeTokenSource(None)
        gate, provider = make_gate(registry, store, tokens=["tok1"])
        operation = MagicMock(return_value="V")

        assert gate.ensure(operation) == "V"
        operation.assert_called_once_with("tok1")
        assert provider.calls == 1

    def test_no_credential_error_names_target(self, registry):
        """Error message mentions the credential target."""
        store = FakeTokenSource(None, target="https://ghe.example.com")
        gate, _ = make_gate(registry, store, tokens=[])

        with pytest.raises(NoCredentialError, match="ghe.example.com"):
            gate.ensure(MagicMock())


class TestFirstAttempt:
    """Tests for the optimistic first attempt."""

    def test_success_without_dispatch(self, registry):
        """Working token never triggers re-authentication."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2"])
        operation = MagicMock(return_value="V")

        assert gate.ensure(operation) == "V"
        operation.assert_called_once_with("tok1")
        assert provider.calls == 0

    def test_transport_error_bypasses_recovery(self, registry):
        """Non-authorization failures propagate immediately."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2"])
        error = httpx.ConnectError("connection refused")
        operation = MagicMock(side_effect=error)

        with pytest.raises(httpx.ConnectError) as exc_info:
            gate.ensure(operation)

        assert exc_info.value is error
        assert provider.calls == 0
        operation.assert_called_once()


class TestAuthorizationRecovery:
    """Tests for the single retry after an authorization failure."""

    def test_retry_with_new_token(self, registry):
        """New token after login is retried once."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2"])

        def operation(token):
            if token == "tok1":
                raise AuthorizationFailure("missing scope")
            return "V"

        op = MagicMock(side_effect=operation)

        assert gate.ensure(op) == "V"
        assert provider.calls == 1
        assert [c.args[0] for c in op.call_args_list] == ["tok1", "tok2"]

    def test_unchanged_token_reraises_original(self, registry):
        """No second attempt when login left the same token."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok1"])
        error = AuthorizationFailure("SAML enforcement")
        operation = MagicMock(side_effect=error)

        with pytest.raises(AuthorizationFailure) as exc_info:
            gate.ensure(operation)

        assert exc_info.value is error
        assert provider.calls == 1
        operation.assert_called_once_with("tok1")

    def test_token_removed_reraises_original(self, registry):
        """No second attempt when login cleared the store."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=[None])
        error = AuthorizationFailure("SAML enforcement")
        operation = MagicMock(side_effect=error)

        with pytest.raises(AuthorizationFailure) as exc_info:
            gate.ensure(operation)

        assert exc_info.value is error
        operation.assert_called_once()

    def test_retry_failure_is_not_retried_again(self, registry):
        """Second authorization failure is surfaced as-is."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2", "tok3"])
        second = AuthorizationFailure("still missing scope")
        operation = MagicMock(side_effect=[AuthorizationFailure("missing scope"), second])

        with pytest.raises(AuthorizationFailure) as exc_info:
            gate.ensure(operation)

        assert exc_info.value is second
        assert provider.calls == 1
        assert operation.call_count == 2

    def test_retry_other_error_propagates(self, registry):
        """Errors from the retry are not swallowed."""
        store = FakeTokenSource("tok1")
        gate, _ = make_gate(registry, store, tokens=["tok2"])
        operation = MagicMock(
            side_effect=[AuthorizationFailure("missing scope"), httpx.ReadTimeout("slow")]
        )

        with pytest.raises(httpx.ReadTimeout):
            gate.ensure(operation)

    def test_no_provider_during_recovery(self, registry):
        """Missing provider is surfaced when recovery is needed."""
        store = FakeTokenSource("tok1")
        gate, _ = make_gate(registry, store)
        operation = MagicMock(side_effect=AuthorizationFailure("missing scope"))

        with pytest.raises(NoReauthTargetAvailableError):
            gate.ensure(operation)

        operation.assert_called_once()

    def test_at_most_two_logins(self, registry):
        """Missing token and rejected token each trigger one login."""
        store = FakeTokenSource(None)
        gate, provider = make_gate(registry, store, tokens=["tok1", "tok2", "tok3"])
        operation = MagicMock(
            side_effect=[AuthorizationFailure("a"), AuthorizationFailure("b")]
        )

        with pytest.raises(AuthorizationFailure):
            gate.ensure(operation)

        assert provider.calls == 2
        assert [c.args[0] for c in operation.call_args_list] == ["tok1", "tok2"]

    def test_store_read_fresh_each_time(self, registry):
        """Every lookup goes to the store."""
        store = FakeTokenSource("tok1")
        gate, _ = make_gate(registry, store, tokens=["tok2"])
        operation = MagicMock(side_effect=[AuthorizationFailure("a"), "V"])

        gate.ensure(operation)
        gate.ensure(MagicMock(return_value="W"))

        assert store.lookups == 3


class TestEnsureAsync:
    """Tests for coroutine operations."""

    @pytest.mark.asyncio
    async def test_success(self, registry):
        """Async operation result is returned."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2"])

        async def operation(token):
            return f"hello {token}"

        assert await gate.ensure_async(operation) == "hello tok1"
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_retry_with_new_token(self, registry):
        """Authorization failure triggers one retry."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=["tok2"])
        seen = []

        async def operation(token):
            seen.append(token)
            if token == "tok1":
                raise AuthorizationFailure("missing scope")
            return "V"

        assert await gate.ensure_async(operation) == "V"
        assert seen == ["tok1", "tok2"]
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_unchanged_token_reraises(self, registry):
        """No retry when the token did not change."""
        store = FakeTokenSource("tok1")
        gate, provider = make_gate(registry, store, tokens=[])
        seen = []

        async def operation(token):
            seen.append(token)
            raise AuthorizationFailure("SAML enforcement")

        with pytest.raises(AuthorizationFailure):
            await gate.ensure_async(operation)

        assert seen == ["tok1"]
        assert provider.calls == 1
