"""Shared fakes for the AnkiConnect and Ollama HTTP services."""

import json

import httpx
import pytest


class FakeAnki:
    """In-memory stand-in for the AnkiConnect add-on."""

    def __init__(self):
        self.notes = {}
        self.requests = []
        self._next_id = 1000

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        action = body["action"]
        params = body.get("params", {})

        if action == "version":
            result = 6
        elif action == "deckNames":
            result = sorted({note["deckName"] for note in self.notes.values()})
        elif action == "addNotes":
            result = []
            for note in params["notes"]:
                self._next_id += 1
                self.notes[self._next_id] = note
                result.append(self._next_id)
        elif action == "findNotes":
            deck = params["query"].removeprefix('deck:"').removesuffix('"')
            result = [nid for nid, note in self.notes.items() if note["deckName"] == deck]
        elif action == "notesInfo":
            result = [
                {
                    "noteId": nid,
                    "modelName": self.notes[nid]["modelName"],
                    "tags": [],
                    "fields": {
                        name: {"value": value, "order": i}
                        for i, (name, value) in enumerate(self.notes[nid]["fields"].items())
                    },
                }
                for nid in params["notes"]
            ]
        else:
            return httpx.Response(200, json={"result": None, "error": "unsupported action"})

        return httpx.Response(200, json={"result": result, "error": None})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class FakeLLM:
    """Returns scripted chat replies and records every request."""

    def __init__(self, *replies: dict):
        self.replies = list(replies)
        self.calls = []

    async def chat(self, messages, tools=None):
        self.calls.append({"messages": [dict(m) for m in messages], "tools": tools})
        return self.replies.pop(0)


@pytest.fixture
def fake_anki():
    return FakeAnki()
