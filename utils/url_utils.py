from urllib.parse import urlparse, parse_qs
import logging
import re

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

VIDEO_ID_RE = re.compile(r'^[A-Za-z0-9_-]{11}$')
VIDEO_PATH_RE = re.compile(r'^/(?:live|embed|v|shorts)/([A-Za-z0-9_-]{11})(?:[/?#]|$)')
YOUTUBE_HOSTS = ('youtube.com', 'www.youtube.com', 'm.youtube.com', 'music.youtube.com')
SHORT_HOSTS = ('youtu.be', 'www.youtu.be')


def _video_id_from_url(url: str) -> str:
    if '://' not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    host = parsed.netloc.lower().split(':')[0]
    # Handle youtu.be short links
    if host in SHORT_HOSTS:
        candidate = parsed.path.strip('/').split('/')[0]
        return candidate if VIDEO_ID_RE.match(candidate) else ''
    if host in YOUTUBE_HOSTS:
        # Try watch?v=VIDEO_ID
        if parsed.path.rstrip('/') == '/watch':
            candidate = parse_qs(parsed.query).get('v', [''])[0]
            return candidate if VIDEO_ID_RE.match(candidate) else ''
        # Try /live/, /embed/, /v/ and /shorts/ paths
        match = VIDEO_PATH_RE.match(parsed.path)
        if match:
            return match.group(1)
    return ''


def extract_video_id(url: str) -> str:
    """Return the 11-character video id from a YouTube URL or a bare id, '' if there is none."""
    try:
        url = (url or '').strip()
        if VIDEO_ID_RE.match(url):
            return url
        return _video_id_from_url(url)
    except ValueError as e:
        logging.error(f"Error extracting video ID from URL {url}: {str(e)}")
        return ''


def is_valid_youtube_url(url: str) -> bool:
    url = (url or '').strip()
    if not url or VIDEO_ID_RE.match(url):
        return False
    try:
        return bool(_video_id_from_url(url))
    except ValueError as e:
        logging.error(f"Error validating URL {url}: {str(e)}")
        return False


def normalize_youtube_url(url: str) -> str:
    video_id = extract_video_id(url)
    if video_id:
        return f"https://www.youtube.com/watch?v={video_id}"
    return url
