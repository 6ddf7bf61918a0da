import os
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",")
CAPTIONS_OUTPUT_DIR = os.getenv("CAPTIONS_OUTPUT_DIR", os.path.join(os.getcwd(), "transcripts"))
CAPTION_LANGUAGES = os.getenv("CAPTION_LANGUAGES", "en.*")
YTDLP_TIMEOUT = int(os.getenv("YTDLP_TIMEOUT", "60"))
YTDLP_METADATA_TIMEOUT = int(os.getenv("YTDLP_METADATA_TIMEOUT", "30"))
