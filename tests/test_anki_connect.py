"""
AnkiConnect client tests
------------------------
Envelope handling and error normalization, against httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from modules.anki_connect import AnkiConnectClient, AnkiConnectError, AnkiNote


def client_for(handler) -> AnkiConnectClient:
    return AnkiConnectClient(url="http://anki.test", transport=httpx.MockTransport(handler))


def respond_with(status: int = 200, **kwargs):
    def handler(request):
        return httpx.Response(status, **kwargs)
    return handler


def invoke(client, *args, **kwargs):
    return asyncio.run(client.invoke(*args, **kwargs))


class TestInvoke:
    """Tests for the request/response envelope."""

    @pytest.mark.parametrize("result", [6, None, [1, None, 3], {"a": {"b": "c"}}, "text"])
    def test_returns_result_unchanged(self, result):
        client = client_for(respond_with(json={"result": result, "error": None}))
        assert invoke(client, "anything") == result

    def test_sends_action_version_and_params(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"result": [], "error": None})

        client = client_for(handler)
        invoke(client, "findNotes", 6, {"query": 'deck:"X"'})
        invoke(client, "deckNames")

        assert seen[0] == {"action": "findNotes", "version": 6, "params": {"query": 'deck:"X"'}}
        assert seen[1] == {"action": "deckNames", "version": 6, "params": {}}

    def test_service_error_is_raised(self):
        client = client_for(respond_with(json={"result": None, "error": "deck was not found"}))
        with pytest.raises(AnkiConnectError, match="deck was not found"):
            invoke(client, "findNotes")

    @pytest.mark.parametrize(
        "body, message",
        [
            ({"result": 1, "error": None, "extra": 2}, "unexpected number of fields"),
            ({"result": 1}, "unexpected number of fields"),
            ({}, "unexpected number of fields"),
            ([None, 1], "unexpected number of fields"),
            ({"result": 1, "other": None}, "missing required error field"),
            ({"error": None, "other": 1}, "missing required result field"),
        ],
    )
    def test_malformed_envelope_is_rejected(self, body, message):
        client = client_for(respond_with(json=body))
        with pytest.raises(AnkiConnectError, match=message):
            invoke(client, "version")

    def test_http_error_uses_embedded_message(self):
        client = client_for(respond_with(500, json={"error": "collection is not available"}))
        with pytest.raises(AnkiConnectError, match="collection is not available"):
            invoke(client, "version")

    def test_http_error_without_message_is_generic(self):
        client = client_for(respond_with(404, text="not here"))
        with pytest.raises(AnkiConnectError, match="AnkiConnect HTTP error: 404"):
            invoke(client, "version")

    @pytest.mark.parametrize("exc", [httpx.ConnectError, httpx.ReadTimeout])
    def test_no_response_is_unreachable(self, exc):
        def handler(request):
            raise exc("down", request=request)

        client = client_for(handler)
        with pytest.raises(AnkiConnectError, match="unreachable"):
            invoke(client, "version")

    def test_undecodable_body_is_normalized(self):
        client = client_for(respond_with(text="<html>oops</html>"))
        with pytest.raises(AnkiConnectError):
            invoke(client, "version")

    def test_local_exception_is_normalized(self):
        client = client_for(respond_with(json={"result": None, "error": None}))
        with pytest.raises(AnkiConnectError):
            invoke(client, "addNotes", 6, {"notes": [object()]})


class TestTypedActions:
    """Tests for the per-action wrappers."""

    def test_add_notes_sends_notes_and_returns_ids(self, fake_anki):
        client = AnkiConnectClient(url="http://anki.test", transport=fake_anki.transport)
        note = AnkiNote(deckName="D", modelName="Basic", fields={"Front": "개", "Back": "dog"})

        ids = asyncio.run(client.add_notes([note]))

        assert len(ids) == 1
        sent = fake_anki.requests[0]["params"]["notes"][0]
        assert sent == {
            "deckName": "D",
            "modelName": "Basic",
            "fields": {"Front": "개", "Back": "dog"},
            "options": {"allowDuplicate": False},
            "tags": [],
        }

    def test_find_notes_rejects_wrong_result_shape(self):
        client = client_for(respond_with(json={"result": {"ids": [1]}, "error": None}))
        with pytest.raises(AnkiConnectError, match="Unexpected findNotes result"):
            asyncio.run(client.find_notes('deck:"D"'))

    def test_notes_info_parses_fields(self):
        info = [{"noteId": 7, "fields": {"Front": {"value": "물", "order": 0}}, "cards": [1]}]
        client = client_for(respond_with(json={"result": info, "error": None}))

        notes = asyncio.run(client.notes_info([7]))

        assert notes[0].noteId == 7
        assert notes[0].field_value("Front") == "물"
        assert notes[0].field_value("Back") == ""

    def test_is_available(self, fake_anki):
        client = AnkiConnectClient(url="http://anki.test", transport=fake_anki.transport)
        assert asyncio.run(client.is_available()) == (True, 6)

    def test_is_available_when_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert asyncio.run(client_for(handler).is_available()) == (False, None)
