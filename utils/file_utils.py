import os
import re
import logging
from datetime import datetime, timezone

from exceptions.custom_exceptions import CaptionSaveError

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


def save_to_filesystem(content: str, filename: str, output_dir: str) -> str:
    """
    Write content to output_dir/filename and return the full path.

    The directory is created when missing. A filename without an extension
    gets ``.txt``.
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
        final_filename = filename if os.path.splitext(filename)[1] else f"{filename}.txt"
        full_path = os.path.join(output_dir, final_filename)
        with open(full_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logging.info(f"File saved successfully: {full_path}")
        return full_path
    except OSError as e:
        logging.error(f"File save failed for {filename} in {output_dir}: {str(e)}")
        raise CaptionSaveError(f"Failed to save file: {str(e)}") from e


def create_timestamped_filename(base_filename: str, extension: str = 'txt', now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    timestamp = now.strftime('%Y-%m-%dT%H-%M-%S')
    clean_base = re.sub(r'[^\w\s-]', '', base_filename).strip() or 'youtube_captions'
    return f"{clean_base}_{timestamp}.{extension}"
