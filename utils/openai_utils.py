import logging
from functools import lru_cache
from openai import OpenAI, OpenAIError
from config import OPENAI_API_KEY, OPENAI_MODEL
from exceptions.custom_exceptions import SummaryError


@lru_cache(maxsize=1)
def get_client() -> OpenAI:
    """Create the OpenAI client on first use so the service runs without a key."""
    if not OPENAI_API_KEY:
        raise SummaryError("OPENAI_API_KEY is not configured; LLM summaries are unavailable.")
    return OpenAI(api_key=OPENAI_API_KEY)


def chat_completion(prompt, model=OPENAI_MODEL, max_tokens=300, temperature=0.5, system_message=None):
    """
    Get a non-streaming chat completion from OpenAI.
    """
    messages = []
    if system_message:
        messages.append({"role": "system", "content": system_message})
    messages.append({"role": "user", "content": prompt})
    try:
        response = get_client().chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature
        )
    except OpenAIError as e:
        logging.error(f"OpenAI chat completion error: {str(e)}")
        raise SummaryError(f"Failed to generate summary: {str(e)}") from e
    content = response.choices[0].message.content
    return content.strip() if content else ""
