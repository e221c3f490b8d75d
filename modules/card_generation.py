"""
Card Generation Module
---------------------
Turns one image into Anki cards through a two-round tool-calling exchange
with the model.

Round 1 sends the image, the instruction and the tool registry. If the
model asks for tool calls, they are run against the deck and their
results go back in round 2, whose reply is the final answer.
"""

import base64
import json
import logging
from pathlib import Path

from config.prompts import IMAGE_VOCAB_PROMPT
from config.settings import SOURCE_LANGUAGE
from modules.conversation import Conversation
from modules.deck import DeckAccessor
from modules.llm_interface import LLMInterface
from modules.tools import (
    TOOLS,
    AddCardsCall,
    GetCardsCall,
    ToolCall,
    ToolName,
    ToolResult,
    parse_tool_call,
)

logger = logging.getLogger(__name__)


def encode_image(image_path: str | Path) -> str:
    """Read an image file and return its contents as base64 text."""
    data = Path(image_path).read_bytes()
    return base64.b64encode(data).decode("ascii")


class ImageCardGenerator:
    """Generates Anki cards from an image using a tool-calling model."""

    def __init__(
        self,
        llm_interface: LLMInterface | None = None,
        deck: DeckAccessor | None = None,
        language: str = SOURCE_LANGUAGE,
    ):
        """
        Initialize the card generator.

        Args:
            llm_interface: LLMInterface instance or None to create a new one
            deck: DeckAccessor instance or None to use the configured deck
            language: Language of the text in the images
        """
        self.llm = llm_interface or LLMInterface()
        self.deck = deck or DeckAccessor()
        self.language = language

    async def _existing_fronts(self) -> str:
        cards = await self.deck.get_cards()
        logger.info(f"Found {len(cards)} existing cards for duplicate context")
        return " ".join(card.front for card in cards)

    def _create_prompt(self, existing_fronts: str) -> str:
        return IMAGE_VOCAB_PROMPT.render(
            language=self.language,
            existing_cards=existing_fronts,
            add_tool=ToolName.ADD_CARDS.value,
        )

    async def run_tool_call(self, call: ToolCall) -> ToolResult:
        """
        Execute one parsed tool call against the deck.

        Unknown functions produce an error result rather than an exception.
        """
        logger.info(f"Calling function: {call.name}")

        if isinstance(call, AddCardsCall):
            outcome = await self.deck.add_cards(call.note_type, call.notes)
            content = json.dumps(outcome.to_dict(), ensure_ascii=False)
        elif isinstance(call, GetCardsCall):
            cards = await self.deck.get_cards()
            content = json.dumps([card.to_dict() for card in cards], ensure_ascii=False)
        else:
            logger.error(f"Function {call.name} is not available.")
            content = f"Error: Function {call.name} not found."

        logger.debug(f"Response from {call.name}: {content}")
        return ToolResult(call_id=call.call_id, name=call.name, content=content)

    async def generate_cards_from_image(self, image_path: str | Path) -> str:
        """
        Run the full exchange for one image.

        Args:
            image_path: Path to the image file

        Returns:
            The model's final text reply
        """
        image_b64 = encode_image(image_path)
        prompt = self._create_prompt(await self._existing_fronts())
        conversation = Conversation(prompt, images=[image_b64])

        logger.info("Sending request to Ollama to parse image...")
        reply = await self.llm.chat(conversation.messages, tools=TOOLS)

        raw_calls = reply.get("tool_calls") or []
        if not raw_calls:
            logger.info("No tool calls requested by the model")
            return reply.get("content", "")

        logger.info(f"Model requested {len(raw_calls)} tool call(s)")
        calls = [parse_tool_call(raw) for raw in raw_calls]
        results = [await self.run_tool_call(call) for call in calls]

        conversation.add_assistant_reply(reply)
        conversation.add_tool_results(results)

        logger.info("Sending tool responses back to Ollama...")
        final = await self.llm.chat(conversation.messages)
        return final.get("content", "")
