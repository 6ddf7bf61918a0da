from fastapi import APIRouter
from pydantic import BaseModel
import asyncio
import logging

from exceptions.custom_exceptions import SummaryError
from utils.openai_prompts import SUMMARIZE_CAPTIONS_PROMPT, SUMMARY_SYSTEM_MESSAGE, MAX_PROMPT_CHARS
from utils.openai_utils import chat_completion
from utils.summary_utils import generate_summary

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

router = APIRouter()


class CaptionSummaryInput(BaseModel):
    text: str
    useLlm: bool = False


def summarize_with_llm(text: str) -> str:
    truncated_text = text[:MAX_PROMPT_CHARS]
    logging.info(f"Requesting LLM summary, caption text length: {len(truncated_text)}")
    summary = chat_completion(
        SUMMARIZE_CAPTIONS_PROMPT.format(captions=truncated_text),
        system_message=SUMMARY_SYSTEM_MESSAGE,
    )
    logging.info(f"LLM summary: {summary[:200]}...")
    return summary or "No summary available."


@router.post("/captions")
async def summarize_captions(input: CaptionSummaryInput):
    if not input.text.strip():
        raise SummaryError("Text is required.", status_code=400)

    result = generate_summary(input.text)
    if input.useLlm:
        result["llmSummary"] = await asyncio.to_thread(summarize_with_llm, input.text)
    return result
