"""
Configuration Module
------------------
Configuration settings for the Image-to-Anki flashcard generator.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directories
ROOT_DIR = Path(__file__).parent.parent
LOG_DIR = ROOT_DIR / "logs"
INPUT_IMAGES_DIR = Path(os.getenv("INPUT_IMAGES_DIR", str(ROOT_DIR / "InputImages")))

# AnkiConnect (addon #2055492159)
ANKI_CONNECT_URL = os.getenv("ANKI_CONNECT_URL", "http://127.0.0.1:8765")

# Ollama
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "mistral-small3.1")
OLLAMA_TIMEOUT = float(os.getenv("OLLAMA_TIMEOUT", "300"))

# LLM parameters
LLM_CONFIG = {
    "ollama": {
        "host": OLLAMA_HOST,
        "model": OLLAMA_MODEL,
        "timeout": OLLAMA_TIMEOUT,
    }
}

# Anki configuration
ANKI_CONFIG = {
    "deck_name": os.getenv("ANKI_DECK", "GreatestEstateDeveloper"),
    "front_field": os.getenv("ANKI_FRONT_FIELD", "Front"),
    "back_field": os.getenv("ANKI_BACK_FIELD", "Back"),
}

# Language of the text in the input images
SOURCE_LANGUAGE = os.getenv("SOURCE_LANGUAGE", "Korean")

# Processing options
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})

# Logging configuration
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "standard",
            "stream": "ext://sys.stdout"
        },
        "file": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "standard",
            "filename": str(LOG_DIR / "app.log"),
            "mode": "a",
            "encoding": "utf-8"
        }
    },
    "loggers": {
        "": {  # root logger
            "handlers": ["console", "file"],
            "level": "DEBUG",
            "propagate": True
        },
        "httpx": {
            "level": "WARNING"
        }
    }
}
