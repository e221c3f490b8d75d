"""
Command Line Interface
--------------------
Provides a command-line interface for the image-to-Anki card generator.
"""

import asyncio
import logging
import logging.config
import sys
import time

import click

from config.settings import (
    ANKI_CONFIG,
    INPUT_IMAGES_DIR,
    LOG_DIR,
    LOGGING_CONFIG,
    OLLAMA_MODEL,
    SOURCE_LANGUAGE,
)
from modules.anki_connect import AnkiConnectClient
from modules.card_generation import ImageCardGenerator
from modules.deck import DeckAccessor, DeckConfig
from modules.llm_interface import LLMInterface
from utils.pipeline import Pipeline

# Configure logging
LOG_DIR.mkdir(exist_ok=True)
logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger(__name__)


def build_pipeline(deck_name: str, model: str, language: str) -> Pipeline:
    deck = DeckAccessor(
        client=AnkiConnectClient(),
        config=DeckConfig(deck_name=deck_name),
    )
    generator = ImageCardGenerator(
        llm_interface=LLMInterface(model=model), deck=deck, language=language
    )
    return Pipeline(generator=generator)


@click.group()
def cli():
    """
    Image-to-Anki Card Generator - Create vocabulary flashcards from images using a local LLM.
    """
    pass


@cli.command()
@click.option(
    "--input-dir",
    "-i",
    type=click.Path(file_okay=False),
    default=str(INPUT_IMAGES_DIR),
    show_default=True,
    help="Directory containing the images to process",
)
@click.option(
    "--deck", default=ANKI_CONFIG["deck_name"], show_default=True, help="Target Anki deck"
)
@click.option("--model", default=OLLAMA_MODEL, show_default=True, help="Ollama model to use")
@click.option(
    "--language",
    default=SOURCE_LANGUAGE,
    show_default=True,
    help="Language of the text in the images",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def generate(input_dir, deck, model, language, verbose):
    """
    Generate Anki cards from every image in a directory.
    """
    # Set the log level based on verbose flag
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)

    start_time = time.time()
    click.echo(f"Processing images in: {input_dir}")

    try:
        pipeline = build_pipeline(deck, model, language)
        result = asyncio.run(pipeline.run(input_dir))
    except Exception as e:
        logger.exception("Unhandled error in pipeline")
        click.echo(click.style(f"❌ Error: {str(e)}", fg="red"))
        sys.exit(1)

    for image_name, answer in result["results"].items():
        click.echo(click.style(f"\n{image_name}", bold=True))
        click.echo(answer)

    elapsed_time = time.time() - start_time
    color = "green" if result["failed"] == 0 else "yellow"
    click.echo(
        click.style(
            f"\nProcessed {result['processed']}/{result['images']} images "
            f"({result['failed']} failed) in {elapsed_time:.2f} seconds",
            fg=color,
        )
    )


@cli.command()
@click.option("--model", default=OLLAMA_MODEL, show_default=True, help="Ollama model to check")
def check_api(model):
    """
    Check that AnkiConnect and Ollama are reachable.
    """

    async def check() -> bool:
        anki = AnkiConnectClient()
        available, version = await anki.is_available()
        if available:
            decks = await anki.deck_names()
            click.echo(
                click.style(f"✅ AnkiConnect v{version} at {anki.url}", fg="green")
            )
            if ANKI_CONFIG["deck_name"] not in decks:
                click.echo(
                    click.style(
                        f"⚠️  Deck \"{ANKI_CONFIG['deck_name']}\" does not exist yet",
                        fg="yellow",
                    )
                )
        else:
            click.echo(click.style(f"❌ AnkiConnect not reachable at {anki.url}", fg="red"))

        llm = LLMInterface(model=model)
        llm_ok = await llm.is_available()
        if llm_ok:
            click.echo(click.style(f"✅ Ollama model {llm.model} at {llm.host}", fg="green"))
        else:
            click.echo(
                click.style(f"❌ Ollama model {llm.model} not available at {llm.host}", fg="red")
            )
        return available and llm_ok

    if not asyncio.run(check()):
        sys.exit(1)


if __name__ == "__main__":
    cli()
