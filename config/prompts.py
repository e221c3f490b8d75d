"""
Prompt Templates Module
-----------------------
Centralized prompt definitions for image-to-flashcard generation.

The same user prompt is sent in both chat rounds of an image, so it is
rendered once per image and reused.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PromptTemplate:
    """A prompt template rendered into a single user message."""
    name: str
    description: str
    user_prompt_template: str

    def render(self, **kwargs) -> str:
        return self.user_prompt_template.format(**kwargs)


# =============================================================================
# Image Vocabulary Prompt
# =============================================================================

IMAGE_VOCAB_USER = (
    "Parse the {language} text in this image. "
    "Identify the subject matter and create Anki flashcards for the {language} vocabulary. "
    "Ensure that duplicates are not being added. "
    "For reference, here are all of the previously added cards: {existing_cards}. "
    "Use the {add_tool} tool to add these new {language} vocab cards to the Anki deck. "
    'For the notes, provide "front" and "back" content.'
)

IMAGE_VOCAB_PROMPT = PromptTemplate(
    name="image_vocab",
    description="Transcribe foreign-language text from an image and add vocabulary cards via tool calls",
    user_prompt_template=IMAGE_VOCAB_USER,
)


# =============================================================================
# All prompts registry (for easy access)
# =============================================================================

PROMPTS = {
    "image_vocab": IMAGE_VOCAB_PROMPT,
}


def get_prompt(name: str) -> PromptTemplate:
    """Get a prompt template by name."""
    if name not in PROMPTS:
        raise ValueError(f"Unknown prompt: {name}. Available: {list(PROMPTS.keys())}")
    return PROMPTS[name]
