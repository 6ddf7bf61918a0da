import subprocess
import os
import re
import logging
from datetime import datetime, timezone

from config import CAPTION_LANGUAGES, YTDLP_TIMEOUT, YTDLP_METADATA_TIMEOUT
from exceptions.custom_exceptions import CaptionDownloadError
from utils.url_utils import extract_video_id, is_valid_youtube_url, normalize_youtube_url

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

DOWNLOAD_ERROR_PREFIX = "Failed to download YouTube captions"
ENGLISH_CAPTION_SUFFIXES = ('.en-orig.vtt', '.en.vtt')
CAPTION_SUFFIX_RE = re.compile(r'\.(en-orig\.vtt|en\.vtt|vtt)$')


def _download_error(reason: str) -> CaptionDownloadError:
    return CaptionDownloadError(f"{DOWNLOAD_ERROR_PREFIX}: {reason}")


def run_ytdlp(args: list[str], timeout: int) -> subprocess.CompletedProcess:
    cmd = ['yt-dlp', *args]
    logging.info(f"Running yt-dlp command: {' '.join(cmd)}")
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        logging.error("yt-dlp executable not found")
        raise _download_error("yt-dlp is not installed or not on PATH") from e
    except subprocess.TimeoutExpired as e:
        logging.error(f"yt-dlp command timed out after {timeout} seconds")
        raise _download_error(f"yt-dlp timed out after {timeout} seconds") from e


def _last_stderr_line(result: subprocess.CompletedProcess) -> str:
    lines = [line for line in (result.stderr or '').splitlines() if line.strip()]
    return lines[-1].strip() if lines else f"yt-dlp exited with code {result.returncode}"


def check_ytdlp(timeout: int = YTDLP_METADATA_TIMEOUT) -> str:
    result = run_ytdlp(['--version'], timeout)
    if result.returncode != 0:
        raise _download_error(_last_stderr_line(result))
    return result.stdout.strip()


def get_video_metadata(url: str, timeout: int = YTDLP_METADATA_TIMEOUT) -> dict:
    result = run_ytdlp(['--print', '%(title)s', '--print', '%(id)s', '--no-warnings', url], timeout)
    if result.returncode != 0:
        logging.warning(f"yt-dlp metadata lookup failed: {result.stderr}")
        raise _download_error(_last_stderr_line(result))
    lines = result.stdout.strip().split('\n')
    title = lines[0].strip() if lines and lines[0].strip() else 'unknown'
    video_id = lines[1].strip() if len(lines) > 1 and lines[1].strip() else extract_video_id(url)
    return {"title": title, "videoId": video_id}


def sanitize_filename(text: str, max_length: int = 50) -> str:
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '_', text)
    text = re.sub(r'_+', '_', text)
    return text[:max_length].strip('_')


def create_session_id(video_title: str, now: datetime | None = None) -> str:
    """Date-stamped folder name, e.g. ``2024-05-01_142501_My_Video``."""
    now = now or datetime.now(timezone.utc)
    date_stamp = now.strftime('%Y-%m-%d_%H%M%S')
    return f"{date_stamp}_{sanitize_filename(video_title) or 'video'}"


def find_caption_file(working_dir: str, video_id: str) -> str | None:
    files = sorted(os.listdir(working_dir))
    logging.info(f"Files found in working directory: {files}")
    for file in files:
        if file.endswith(ENGLISH_CAPTION_SUFFIXES) and video_id and video_id in file:
            return os.path.join(working_dir, file)
    # Fallback: any VTT file if the video-specific search fails
    for file in files:
        if file.endswith('.vtt'):
            logging.info(f"Using fallback VTT file: {file}")
            return os.path.join(working_dir, file)
    return None


def download_youtube_captions(
    url: str,
    output_dir: str,
    timeout: int = YTDLP_TIMEOUT,
    languages: str = CAPTION_LANGUAGES,
) -> str:
    """
    Download the caption track of a YouTube video with yt-dlp.

    Captions land in a date-stamped session folder under ``output_dir``.
    Returns the path of the downloaded VTT file. Every failure is raised as
    CaptionDownloadError with the underlying reason in the message.
    """
    if not is_valid_youtube_url(url):
        raise _download_error("Invalid YouTube URL provided")
    url = normalize_youtube_url(url)

    logging.info(f"Fetching video metadata for {url}")
    metadata = get_video_metadata(url)
    logging.info(f"Video metadata retrieved: title={metadata['title']}, videoId={metadata['videoId']}")

    session_id = create_session_id(metadata["title"])
    working_dir = os.path.join(output_dir, session_id)
    try:
        os.makedirs(working_dir, exist_ok=True)
    except OSError as e:
        logging.error(f"Could not create session folder {working_dir}: {str(e)}")
        raise _download_error(str(e)) from e

    logging.info(f"Starting YouTube caption download into {working_dir}")
    cmd = [
        '--write-sub',
        '--write-auto-sub',
        '--sub-langs', languages,
        '--sub-format', 'vtt',
        '--skip-download',
        '--no-cache-dir',
        '--no-warnings',
        '-o', os.path.join(working_dir, f"%(title)s_{metadata['videoId']}.%(ext)s"),
        url,
    ]
    result = run_ytdlp(cmd, timeout)
    if result.returncode != 0:
        logging.warning(f"yt-dlp failed: {result.stderr}")
        raise _download_error(_last_stderr_line(result))
    if result.stderr:
        logging.info(f"yt-dlp stderr output: {result.stderr}")

    vtt_path = find_caption_file(working_dir, metadata["videoId"])
    if not vtt_path:
        available = ', '.join(sorted(os.listdir(working_dir))) or 'none'
        raise _download_error(
            f"No English captions found for video ID {metadata['videoId']}. Available files: {available}"
        )
    logging.info(f"Caption download completed: {vtt_path}")
    return vtt_path


def extract_video_title(vtt_path: str) -> str | None:
    filename = re.split(r'[/\\]', vtt_path)[-1]
    title = CAPTION_SUFFIX_RE.sub('', filename)
    title = re.sub(r'[_-]', ' ', title).strip()
    return title or None
