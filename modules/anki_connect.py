"""
AnkiConnect Client Module
-------------------------
REST client for AnkiConnect (Anki addon #2055492159).
Communicates with Anki over its localhost HTTP API to find, read and
add notes.

Every failure mode (an error reported by AnkiConnect, a malformed
response, no response at all, or a local exception) surfaces as a single
AnkiConnectError carrying a readable message.
"""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from config.settings import ANKI_CONNECT_URL

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6


class AnkiConnectError(Exception):
    """Raised when AnkiConnect is unreachable or returns an error."""


class NoteOptions(BaseModel):
    allowDuplicate: bool = False


class AnkiNote(BaseModel):
    """A note in the shape expected by the addNotes action."""
    deckName: str
    modelName: str
    fields: dict[str, str]
    options: NoteOptions = Field(default_factory=NoteOptions)
    tags: list[str] = []


class NoteField(BaseModel):
    value: str = ""
    order: int | None = None


class NoteInfo(BaseModel):
    """A single entry of the notesInfo result."""
    model_config = ConfigDict(extra="ignore")

    noteId: int
    modelName: str | None = None
    tags: list[str] = []
    fields: dict[str, NoteField] = {}

    def field_value(self, name: str) -> str:
        """Return the value of a field, or an empty string if the note lacks it."""
        field = self.fields.get(name)
        return field.value if field is not None else ""


_NOTE_IDS = TypeAdapter(list[int])
_NULLABLE_NOTE_IDS = TypeAdapter(list[int | None])
_NOTES_INFO = TypeAdapter(list[NoteInfo])


class AnkiConnectClient:
    """Client for AnkiConnect REST API."""

    def __init__(
        self,
        url: str = ANKI_CONNECT_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.transport = transport

    async def invoke(
        self,
        action: str,
        version: int = ANKI_CONNECT_VERSION,
        params: dict | None = None,
    ) -> any:
        """Send a request to AnkiConnect and return the result.

        Args:
            action: The AnkiConnect action name
            version: The AnkiConnect API version
            params: Optional parameters for the action

        Returns:
            The result field from AnkiConnect's response, unchanged

        Raises:
            AnkiConnectError: If AnkiConnect is unreachable or returns an error
        """
        payload = {"action": action, "version": version, "params": params or {}}
        logger.debug(f"AnkiConnect request: {action} (v{version})")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(30.0, connect=5.0), transport=self.transport
            ) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.TimeoutException, httpx.NetworkError):
            raise AnkiConnectError(
                f"AnkiConnect unreachable at {self.url}: no response received. "
                "Is Anki running with AnkiConnect installed?"
            )
        except httpx.HTTPStatusError as e:
            raise AnkiConnectError(
                _embedded_error(e.response)
                or f"AnkiConnect HTTP error: {e.response.status_code}"
            )
        except Exception as e:
            raise AnkiConnectError(str(e) or "AnkiConnect request failed")

        return _unwrap(data)

    async def version(self) -> int:
        """Return the AnkiConnect API version reported by the add-on."""
        return await self.invoke("version")

    async def is_available(self) -> tuple[bool, int | None]:
        """Check if AnkiConnect is reachable.

        Returns:
            Tuple of (available, version)
        """
        try:
            version = await self.version()
            return True, version
        except AnkiConnectError:
            return False, None

    async def deck_names(self) -> list[str]:
        """Get all deck names."""
        return await self.invoke("deckNames")

    async def add_notes(self, notes: list[AnkiNote]) -> list[int | None]:
        """Add multiple notes to Anki in one request.

        Args:
            notes: Notes to add

        Returns:
            One entry per input note: the new note ID, or None if Anki
            rejected that note
        """
        result = await self.invoke(
            "addNotes", params={"notes": [note.model_dump() for note in notes]}
        )
        return _validate("addNotes", _NULLABLE_NOTE_IDS, result)

    async def find_notes(self, query: str) -> list[int]:
        """Return the IDs of notes matching an Anki search query."""
        result = await self.invoke("findNotes", params={"query": query})
        return _validate("findNotes", _NOTE_IDS, result)

    async def notes_info(self, note_ids: list[int]) -> list[NoteInfo]:
        """Fetch field data for the given note IDs."""
        result = await self.invoke("notesInfo", params={"notes": list(note_ids)})
        return _validate("notesInfo", _NOTES_INFO, result)


def _embedded_error(response: httpx.Response) -> str | None:
    """Pull the error message out of an error response body, if it has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


def _unwrap(data: any) -> any:
    """Check the {error, result} envelope and return the result."""
    if not isinstance(data, dict) or len(data) != 2:
        raise AnkiConnectError("response has an unexpected number of fields")
    if "error" not in data:
        raise AnkiConnectError("response is missing required error field")
    if "result" not in data:
        raise AnkiConnectError("response is missing required result field")
    if data["error"] is not None:
        raise AnkiConnectError(str(data["error"]))
    return data["result"]


def _validate(action: str, adapter: TypeAdapter, result: any):
    try:
        return adapter.validate_python(result)
    except ValidationError as e:
        raise AnkiConnectError(f"Unexpected {action} result: {e}")
