"""Tests for partcache.http.endpoint."""

from __future__ import annotations

import pytest

from partcache.errors import EndpointBindingError
from partcache.http.endpoint import (
    CHANNEL_MESSAGE,
    PARTIES,
    PLAYER,
    Endpoint,
    merge_vars,
)


class TestBindAssoc:
    """Tests for Endpoint.bind_assoc."""

    def test_binds_named_placeholder(self) -> None:
        endpoint = Endpoint("/players/{player_id}").bind_assoc({"player_id": 42})

        assert str(endpoint) == "/players/42"

    def test_binds_multiple_placeholders(self) -> None:
        endpoint = Endpoint(CHANNEL_MESSAGE).bind_assoc(
            {"channel_id": 2, "message_id": 5, "unused": "x"}
        )

        assert str(endpoint) == "/channels/2/messages/5"

    def test_missing_variable_raises(self) -> None:
        with pytest.raises(EndpointBindingError) as exc_info:
            Endpoint(PLAYER).bind_assoc({})

        assert exc_info.value.missing == ["player_id"]

    def test_none_value_counts_as_missing(self) -> None:
        """A None value is never substituted as an empty segment."""
        with pytest.raises(EndpointBindingError):
            Endpoint(PLAYER).bind_assoc({"player_id": None})

    def test_quotes_values(self) -> None:
        endpoint = Endpoint(PLAYER).bind_assoc({"player_id": "a/b"})

        assert str(endpoint) == "/players/a%2Fb"

    def test_template_without_placeholders(self) -> None:
        assert str(Endpoint(PARTIES).bind_assoc({})) == "/parties"


class TestBind:
    """Tests for positional Endpoint.bind."""

    def test_binds_in_template_order(self) -> None:
        endpoint = Endpoint(CHANNEL_MESSAGE).bind(2, 5)

        assert str(endpoint) == "/channels/2/messages/5"

    def test_too_few_arguments_raise(self) -> None:
        with pytest.raises(EndpointBindingError):
            Endpoint(CHANNEL_MESSAGE).bind(2)


class TestValidate:
    """Tests for Endpoint.validate."""

    def test_accepts_satisfiable_template(self) -> None:
        Endpoint.validate(CHANNEL_MESSAGE, {"channel_id", "message_id"})

    def test_rejects_unsatisfiable_template(self) -> None:
        with pytest.raises(EndpointBindingError, match="message_id"):
            Endpoint.validate(CHANNEL_MESSAGE, {"channel_id"})

    def test_placeholders_in_order(self) -> None:
        assert Endpoint(CHANNEL_MESSAGE).placeholders == ("channel_id", "message_id")


class TestMergeVars:
    """Tests for merge_vars."""

    def test_later_values_win(self) -> None:
        assert merge_vars({"a": 1}, {"a": 2}) == {"a": 2}

    def test_none_never_overwrites(self) -> None:
        assert merge_vars({"a": 1}, {"a": None, "b": None}) == {"a": 1, "b": None}
