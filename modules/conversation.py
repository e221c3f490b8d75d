"""
Conversation Module
-------------------
Ordered message history for the chat rounds of a single image.
"""

from modules.tools import ToolResult


class Conversation:
    """Message list for one image, built up through explicit appends."""

    def __init__(self, prompt: str, images: list[str] | None = None):
        """
        Start a conversation with the user message.

        Args:
            prompt: Instruction text
            images: Base64-encoded images attached to the instruction
        """
        user_message = {"role": "user", "content": prompt}
        if images:
            user_message["images"] = list(images)
        self.messages: list[dict] = [user_message]

    @property
    def user_message(self) -> dict:
        return self.messages[0]

    def add_assistant_reply(self, message: dict) -> None:
        """Append a model reply verbatim, tool calls included."""
        self.messages.append(message)

    def add_tool_results(self, results: list[ToolResult]) -> None:
        """Append tool outputs in the order their calls were issued."""
        self.messages.extend(result.to_message() for result in results)

    def __len__(self) -> int:
        return len(self.messages)
