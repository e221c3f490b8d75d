"""
Deck Accessor Module
--------------------
Adds notes to, and reads notes back from, the single configured Anki deck.

Both operations turn AnkiConnect failures into plain values so that the
tool-calling loop can hand them back to the model instead of aborting.
"""

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel

from config.settings import ANKI_CONFIG
from modules.anki_connect import AnkiConnectClient, AnkiConnectError, AnkiNote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeckConfig:
    """Target deck and note field mapping."""

    deck_name: str = ANKI_CONFIG["deck_name"]
    front_field: str = ANKI_CONFIG["front_field"]
    back_field: str = ANKI_CONFIG["back_field"]

    @property
    def query(self) -> str:
        return f'deck:"{self.deck_name}"'


class Note(BaseModel):
    """One flashcard proposed by the model."""
    front: str = ""
    back: str = ""


@dataclass
class PersistedNote:
    """A note read back from Anki."""

    note_id: int
    front: str
    back: str

    def to_dict(self) -> dict:
        return {"noteId": self.note_id, "front": self.front, "back": self.back}


@dataclass
class AddCardsResult:
    """Outcome of a batch add."""

    success: bool
    added_count: int = 0
    results: list[int | None] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "added_count": self.added_count,
            "results": self.results,
        }


class DeckAccessor:
    """Reads and writes notes in one Anki deck through AnkiConnect."""

    def __init__(
        self,
        client: AnkiConnectClient | None = None,
        config: DeckConfig | None = None,
    ):
        """
        Initialize the deck accessor.

        Args:
            client: AnkiConnectClient instance or None to create a default one
            config: Deck name and field mapping or None to use the settings
        """
        self.client = client or AnkiConnectClient()
        self.config = config or DeckConfig()

    def _to_anki_note(self, note_type: str, note: Note) -> AnkiNote:
        return AnkiNote(
            deckName=self.config.deck_name,
            modelName=note_type,
            fields={
                self.config.front_field: note.front,
                self.config.back_field: note.back,
            },
        )

    async def add_cards(self, note_type: str, notes: list[Note]) -> AddCardsResult:
        """
        Add a batch of notes to the deck in a single request.

        Args:
            note_type: Anki note type (model) to create the notes with
            notes: Notes to add

        Returns:
            AddCardsResult; failures are reported in the result, never raised
        """
        logger.info(
            f'Attempting to add {len(notes)} cards to deck "{self.config.deck_name}" '
            f'with note type "{note_type}"'
        )
        anki_notes = [self._to_anki_note(note_type, note) for note in notes]

        try:
            results = await self.client.add_notes(anki_notes)
        except AnkiConnectError as e:
            logger.error(f"Error adding cards to deck: {e}")
            return AddCardsResult(success=False, error=str(e))

        added_count = sum(1 for note_id in results if note_id is not None)
        logger.info(f"Added {added_count}/{len(notes)} cards: {results}")
        return AddCardsResult(success=True, added_count=added_count, results=results)

    async def get_cards(self) -> list[PersistedNote]:
        """
        Return every note in the deck.

        An empty deck and a failed lookup both return an empty list.
        """
        deck_name = self.config.deck_name
        logger.info(f'Attempting to get cards from deck "{deck_name}"')

        try:
            note_ids = await self.client.find_notes(self.config.query)
            if not note_ids:
                logger.info(f'No notes found in deck "{deck_name}".')
                return []
            infos = await self.client.notes_info(note_ids)
        except AnkiConnectError as e:
            logger.error(f"Error getting cards from deck: {e}")
            return []

        return [
            PersistedNote(
                note_id=info.noteId,
                front=info.field_value(self.config.front_field),
                back=info.field_value(self.config.back_field),
            )
            for info in infos
        ]
