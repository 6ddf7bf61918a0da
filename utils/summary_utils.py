import math
import re
from collections import Counter

WORDS_PER_MINUTE = 200
MIN_KEY_PHRASE_LENGTH = 6
MAX_KEY_PHRASES = 10


def extract_key_phrases(words: list[str], limit: int = MAX_KEY_PHRASES) -> list[str]:
    """Recurring long words, most frequent first; ties keep first-seen order."""
    counts = Counter()
    for word in words:
        clean_word = re.sub(r'[^\w]', '', word.lower())
        if len(clean_word) >= MIN_KEY_PHRASE_LENGTH:
            counts[clean_word] += 1
    return [word for word, count in counts.most_common() if count > 1][:limit]


def generate_summary(text: str) -> dict:
    words = text.split()
    word_count = len(words)
    character_count = len(text)
    estimated_reading_time = math.ceil(word_count / WORDS_PER_MINUTE)
    key_phrases = extract_key_phrases(words)

    sentences = [s for s in re.split(r'[.!?]+', text) if s.strip()]
    first_few_sentences = '. '.join(s.strip() for s in sentences[:3])
    if len(sentences) > 3:
        first_few_sentences += '...'

    minute_label = 'minute' if estimated_reading_time == 1 else 'minutes'
    key_topics = ', '.join(key_phrases) if key_phrases else 'No significant recurring topics identified'
    summary = (
        "**Content Summary:**\n\n"
        f"{first_few_sentences}\n\n"
        "**Statistics:**\n"
        f"- Word Count: {word_count:,}\n"
        f"- Character Count: {character_count:,}\n"
        f"- Estimated Reading Time: {estimated_reading_time} {minute_label}\n"
        f"- Total Sentences: {len(sentences)}\n\n"
        f"**Key Topics:** {key_topics}"
    )

    return {
        "summary": summary,
        "wordCount": word_count,
        "characterCount": character_count,
        "estimatedReadingTime": estimated_reading_time,
        "keyPhrases": key_phrases,
    }
