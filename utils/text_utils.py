import re
import logging

from exceptions.custom_exceptions import CaptionReadError, CaptionSaveError

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

HEADER_PREFIXES = ('WEBVTT', 'Kind:', 'Language:')
CUE_SEPARATOR = '-->'
POSITION_MARKERS = ('align:', 'position:')

CUE_TIMING_RE = re.compile(r'^\d{2}:\d{2}:\d{2}\.\d{3}\s*-->\s*\d{2}:\d{2}:\d{2}\.\d{3}')
LEADING_TIMESTAMP_RE = re.compile(r'^\d{2}:\d{2}:\d{2}')
CUE_INDEX_RE = re.compile(r'^[0-9]+$')
MARKUP_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')
ENTITY_RE = re.compile(r'&(?:#([0-9]+)|#[xX]([0-9a-fA-F]+)|([a-zA-Z]+));')

HTML_ENTITIES = {
    'amp': '&',
    'lt': '<',
    'gt': '>',
    'quot': '"',
    'apos': "'",
    'nbsp': ' ',
}

MAX_CODE_POINT = 0x10FFFF


def _decode_entity(match: re.Match) -> str:
    decimal, hexadecimal, name = match.groups()
    if name is not None:
        return HTML_ENTITIES.get(name, match.group(0))
    code_point = int(decimal) if decimal is not None else int(hexadecimal, 16)
    # Surrogates and out-of-range values are not characters; keep the reference as written.
    if code_point == 0 or code_point > MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def decode_html_entities(text: str) -> str:
    """Decode the named entities captions use plus numeric character references.

    Decoding is a single pass, so ``&amp;lt;`` becomes the literal ``&lt;``.
    Double-encoded input is therefore the one case where cleaning already
    cleaned text decodes further.
    """
    return ENTITY_RE.sub(_decode_entity, text)


def remove_vtt_tags(text: str) -> str:
    text = MARKUP_RE.sub('', text)
    text = WHITESPACE_RE.sub(' ', text).strip()
    return text


def is_format_line(text: str) -> bool:
    """Headers and cue timing lines, with or without position metadata."""
    if text.startswith(HEADER_PREFIXES):
        return True
    if CUE_SEPARATOR in text and any(marker in text for marker in POSITION_MARKERS):
        return True
    return bool(CUE_TIMING_RE.match(text))


def is_structural_line(text: str) -> bool:
    """Cue numbers and lines starting with a timestamp carry no caption text."""
    return bool(CUE_INDEX_RE.match(text) or LEADING_TIMESTAMP_RE.match(text))


def clean_caption_line(line: str) -> str:
    """Return the readable text of a single caption line, or '' when there is none.

    The finished text is classified again, so text that only looks like a
    header or a cue once its markup is gone is dropped on the first pass.
    """
    line = line.strip()
    if not line or is_format_line(line):
        return ''

    if MARKUP_RE.search(line):
        line = remove_vtt_tags(line)
        if not line:
            return ''
    if is_structural_line(line):
        return ''

    text = decode_html_entities(line)
    if '<' in text or '>' in text:
        # Encoded markup (&lt;i&gt;) is stripped like the real thing, stray brackets dropped.
        text = MARKUP_RE.sub('', text).replace('<', '').replace('>', '')
    text = WHITESPACE_RE.sub(' ', text).strip()
    if not text or is_format_line(text) or is_structural_line(text):
        return ''
    return text


def deduplicate_lines(lines: list[str]) -> list[str]:
    return list(dict.fromkeys(lines))


def normalize_captions(raw_text: str) -> list[str]:
    """
    Turn the text of a VTT caption file into unique, readable caption lines.

    Headers, cue timings, cue numbers and inline timing/styling markup are
    dropped. Auto-generated "rolling" captions repeat each sentence across
    consecutive cues, so only the first occurrence of a line is kept.
    Unrecognised lines never raise; they are either kept as text or dropped.
    """
    cleaned_lines = []
    for line in raw_text.splitlines():
        cleaned = clean_caption_line(line)
        if cleaned:
            cleaned_lines.append(cleaned)
    return deduplicate_lines(cleaned_lines)


def read_caption_file(input_file: str) -> str:
    try:
        with open(input_file, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logging.error(f"Could not read caption file {input_file}: {str(e)}")
        raise CaptionReadError(f"Failed to clean VTT file: {str(e)}") from e


def clean_vtt_file(input_file: str, output_file: str | None = None) -> list[str]:
    logging.info(f"Starting VTT file cleaning: {input_file}")
    content = read_caption_file(input_file)
    captions = normalize_captions(content)
    logging.info(f"VTT cleaning completed: {len(content.splitlines())} raw lines, {len(captions)} cleaned lines")

    if output_file:
        try:
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(join_captions(captions, '\n') + '\n')
        except OSError as e:
            logging.error(f"Could not write cleaned captions to {output_file}: {str(e)}")
            raise CaptionSaveError(f"Failed to save cleaned captions: {str(e)}") from e
        logging.info(f"Cleaned text saved to file: {output_file}")
    return captions


def join_captions(captions: list[str], separator: str = ' ') -> str:
    return separator.join(captions)


def get_caption_stats(captions: list[str]) -> dict:
    total_lines = len(captions)
    total_words = sum(len(line.split()) for line in captions)
    total_characters = sum(len(line) for line in captions)
    average_words_per_line = total_words / total_lines if total_lines > 0 else 0
    return {
        "totalLines": total_lines,
        "totalWords": total_words,
        "totalCharacters": total_characters,
        "averageWordsPerLine": round(average_words_per_line, 2),
    }
