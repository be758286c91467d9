"""Tests for the re-authentication trigger."""

from unittest.mock import MagicMock, call

import pytest

from ghgate.auth.reauth import (
    DEFAULT_ENDPOINTS,
    ESSENTIALS_CONNECT,
    GITHUB_CONNECT,
    ReauthEndpoint,
    ReauthTrigger,
)
from ghgate.exceptions import CommandNotFoundError, NoReauthTargetAvailableError


class TestReauthEndpoint:
    """Tests for ReauthEndpoint."""

    def test_default_order(self):
        """GitHub Essentials is tried before GitHub for Visual Studio."""
        assert DEFAULT_ENDPOINTS == (ESSENTIALS_CONNECT, GITHUB_CONNECT)

    def test_str(self):
        """Endpoint renders as namespace and hex id."""
        assert str(ReauthEndpoint("ns", 0x110)) == "ns:0x0110"

    def test_hashable(self):
        """Endpoints compare by value."""
        assert ReauthEndpoint("ns", 1) == ReauthEndpoint("ns", 1)
        assert len({ReauthEndpoint("ns", 1), ReauthEndpoint("ns", 1)}) == 1


class TestReauthTrigger:
    """Tests for ReauthTrigger.run."""

    def test_falls_back_in_declared_order(self):
        """First NotFound is skipped and the second endpoint runs."""
        first = ReauthEndpoint("first", 1)
        second = ReauthEndpoint("second", 2)
        dispatcher = MagicMock()
        dispatcher.dispatch.side_effect = [CommandNotFoundError("first", 1), None]

        ReauthTrigger(dispatcher, [first, second]).run()

        assert dispatcher.dispatch.call_args_list == [call("first", 1), call("second", 2)]

    def test_stops_at_first_success(self):
        """Later endpoints are not dispatched."""
        dispatcher = MagicMock()

        ReauthTrigger(dispatcher).run()

        dispatcher.dispatch.assert_called_once_with(
            ESSENTIALS_CONNECT.namespace, ESSENTIALS_CONNECT.command_id
        )

    def test_all_missing(self):
        """Exhausted list raises NoReauthTargetAvailableError."""
        def not_found(namespace, command_id):
            raise CommandNotFoundError(namespace, command_id)

        dispatcher = MagicMock()
        dispatcher.dispatch.side_effect = not_found

        with pytest.raises(NoReauthTargetAvailableError):
            ReauthTrigger(dispatcher).run()

        assert dispatcher.dispatch.call_count == len(DEFAULT_ENDPOINTS)

    def test_other_dispatch_errors_propagate(self):
        """A provider that exists but fails is not skipped."""
        dispatcher = MagicMock()
        dispatcher.dispatch.side_effect = OSError("provider crashed")

        with pytest.raises(OSError, match="provider crashed"):
            ReauthTrigger(dispatcher).run()

        dispatcher.dispatch.assert_called_once()

    def test_with_registry(self, registry):
        """Works against the in-process registry."""
        handler = MagicMock()
        registry.register(GITHUB_CONNECT.namespace.upper(), GITHUB_CONNECT.command_id, handler)

        ReauthTrigger(registry).run()

        handler.assert_called_once_with()

    def test_empty_endpoints_rejected(self):
        """At least one endpoint is required."""
        with pytest.raises(ValueError):
            ReauthTrigger(MagicMock(), [])
