"""
Pipeline Module
-------------
Runs the card generator over every image in an input directory.
"""

import logging
import time
from pathlib import Path

from tqdm import tqdm

from config.settings import IMAGE_EXTENSIONS, INPUT_IMAGES_DIR
from modules.card_generation import ImageCardGenerator

logger = logging.getLogger(__name__)


def find_images(input_dir: str | Path) -> list[Path]:
    """
    List image files directly inside a directory.

    Extensions are matched case-insensitively; subdirectories are not
    searched.

    Raises:
        OSError: If the directory cannot be listed
    """
    return sorted(
        path
        for path in Path(input_dir).iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS
    )


class Pipeline:
    """Main pipeline for processing a folder of images one at a time."""

    def __init__(self, generator: ImageCardGenerator | None = None):
        """
        Initialize the pipeline.

        Args:
            generator: ImageCardGenerator instance or None to create a default one
        """
        self.generator = generator or ImageCardGenerator()

    async def run(self, input_dir: str | Path = INPUT_IMAGES_DIR) -> dict:
        """
        Process every image in the input directory.

        A failure on one image is logged and the next image is processed.

        Args:
            input_dir: Directory containing the images

        Returns:
            Dictionary with pipeline results
        """
        start_time = time.time()
        input_dir = Path(input_dir)
        images = find_images(input_dir)

        if not images:
            logger.info(f"No images found in {input_dir}")
            return {"images": 0, "processed": 0, "failed": 0, "results": {}}

        logger.info(f"Found {len(images)} images in {input_dir}")
        results = {}
        failed = 0

        for image_path in tqdm(images, desc="Processing images", unit="image"):
            logger.info(f"Processing image: {image_path}")
            try:
                result = await self.generator.generate_cards_from_image(image_path)
            except Exception:
                logger.exception(f"Error processing image {image_path}")
                failed += 1
                continue

            logger.info(f"LLM processing result for {image_path.name}: {result}")
            results[image_path.name] = result

        elapsed_time = time.time() - start_time
        logger.info(f"Processing complete in {elapsed_time:.2f} seconds")

        return {
            "images": len(images),
            "processed": len(results),
            "failed": failed,
            "results": results,
            "elapsed_time": elapsed_time,
        }
