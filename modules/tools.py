"""
Tool Registry Module
--------------------
Tool descriptors offered to the model, and the typed calls parsed back
out of its replies.

Only the two deck operations exist. Any other function name the model
produces becomes an UnsupportedCall instead of a failed lookup.
"""

import json
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from modules.deck import Note


class ToolName(str, Enum):
    """Functions the model is allowed to call."""
    ADD_CARDS = "addCardsToDeck"
    GET_CARDS = "getCardsFromDeck"


_NOTES_SCHEMA = {
    "type": "array",
    "description": 'An array of notes to add. Each note should have a "front" and "back".',
    "items": {
        "type": "object",
        "properties": {
            "front": {
                "type": "string",
                "description": "The content for the front of the card.",
            },
            "back": {
                "type": "string",
                "description": "The content for the back of the card.",
            },
        },
        "required": ["front", "back"],
    },
}

TOOLS = (
    {
        "type": "function",
        "function": {
            "name": ToolName.ADD_CARDS.value,
            "description": "Adds a list of new cards (notes) to a specified Anki deck.",
            "parameters": {
                "type": "object",
                "properties": {
                    "noteType": {
                        "type": "string",
                        "description": (
                            "The Anki note type to use for the new cards "
                            '(e.g., "Basic", "Basic (and reversed card)").'
                        ),
                    },
                    "notes": _NOTES_SCHEMA,
                },
                "required": ["noteType", "notes"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": ToolName.GET_CARDS.value,
            "description": "Retrieves all cards (notes) from a specified Anki deck.",
            "parameters": {
                "type": "object",
                "properties": {},
                "required": [],
            },
        },
    },
)


class AddCardsArguments(BaseModel):
    noteType: str
    notes: list[Note]


@dataclass(frozen=True)
class AddCardsCall:
    call_id: str | None
    note_type: str
    notes: list[Note]

    name = ToolName.ADD_CARDS.value


@dataclass(frozen=True)
class GetCardsCall:
    call_id: str | None

    name = ToolName.GET_CARDS.value


@dataclass(frozen=True)
class UnsupportedCall:
    call_id: str | None
    name: str


ToolCall = AddCardsCall | GetCardsCall | UnsupportedCall


@dataclass(frozen=True)
class ToolResult:
    """Output of one tool call, keyed by the originating call ID."""

    call_id: str | None
    name: str
    content: str

    def to_message(self) -> dict:
        message = {"role": "tool", "name": self.name, "content": self.content}
        if self.call_id is not None:
            message["tool_call_id"] = self.call_id
        return message


def _arguments(function: dict) -> dict:
    # Some models send the arguments as a JSON string rather than an object
    arguments = function.get("arguments") or {}
    if isinstance(arguments, str):
        arguments = json.loads(arguments) if arguments.strip() else {}
    return arguments


def parse_tool_call(raw: dict) -> ToolCall:
    """
    Turn one entry of a model reply's tool_calls into a typed call.

    Raises:
        pydantic.ValidationError: If addCardsToDeck arguments are malformed
        json.JSONDecodeError: If string arguments are not valid JSON
    """
    function = raw.get("function") or {}
    name = function.get("name", "")
    call_id = raw.get("id") or raw.get("tool_call_id")

    if name == ToolName.ADD_CARDS.value:
        args = AddCardsArguments.model_validate(_arguments(function))
        return AddCardsCall(call_id=call_id, note_type=args.noteType, notes=args.notes)
    if name == ToolName.GET_CARDS.value:
        return GetCardsCall(call_id=call_id)
    return UnsupportedCall(call_id=call_id, name=name)
