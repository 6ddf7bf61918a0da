# Prompt templates for OpenAI usage in summary_service.py

SUMMARY_SYSTEM_MESSAGE = "You are a helpful assistant that summarizes video captions."

SUMMARIZE_CAPTIONS_PROMPT = """Based on these cleaned video captions: '{captions}...', provide a 3-4 sentence summary in plain text. Do not start with 'The captions' or 'The video discusses' and do not mention the speaker; generalize the summary instead. Ignore repeated or filler phrases."""

# Characters of caption text sent to the model
MAX_PROMPT_CHARS = 10000
