"""MCP stdio server exposing the caption tools to an agent host.

Each tool returns a JSON document. Failures are reported in the same
document (``success: false`` with the failing stage and message) instead of
being raised, so the host always gets one consistent shape.
"""

import asyncio
import json
import logging

from mcp.server.fastmcp import FastMCP

from exceptions.custom_exceptions import CaptionError
from services.caption_service import (
    process_youtube_captions,
    download_captions,
    clean_captions,
    save_formatted_transcript,
    health_status,
    new_request_id,
)

# Logs go to stderr; stdout carries the MCP protocol.
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

mcp = FastMCP("youtube-transcripts")


async def _run_tool(func, *args, request_id: str | None = None) -> str:
    try:
        result = await asyncio.to_thread(func, *args)
    except CaptionError as e:
        if request_id and not e.request_id:
            e.with_request_id(request_id)
        return json.dumps(e.to_payload(), indent=2)
    return json.dumps(result, indent=2)


@mcp.tool(name="process-youtube-captions")
async def process_youtube_captions_tool(
    url: str,
    outputDir: str | None = None,
    filename: str | None = None,
    includeRawCaptions: bool = False,
    includeSummary: bool = False,
) -> str:
    """Download, clean, save, and summarise YouTube video captions.

    Args:
        url: YouTube video URL (standard, short, embed, and Shorts URLs).
        outputDir: Base directory for the session folder (server default when omitted).
        filename: Base filename for the cleaned text (timestamped from the video title when omitted).
        includeRawCaptions: Also save the raw VTT file next to the cleaned text.
        includeSummary: Also save a Markdown summary with key topics.
    """
    request_id = new_request_id()
    return await _run_tool(
        process_youtube_captions,
        url,
        outputDir,
        filename,
        includeRawCaptions,
        includeSummary,
        request_id,
        request_id=request_id,
    )


@mcp.tool(name="download-youtube-captions")
async def download_youtube_captions_tool(url: str, outputDir: str | None = None) -> str:
    """Download the raw VTT caption file of a YouTube video."""
    return await _run_tool(download_captions, url, outputDir)


@mcp.tool(name="clean-vtt-file")
async def clean_vtt_file_tool(vttFilePath: str, outputPath: str | None = None) -> str:
    """Clean an existing VTT file to extract readable text.

    Args:
        vttFilePath: Path to the VTT file to clean.
        outputPath: Where to write the cleaned lines (optional).
    """
    return await _run_tool(clean_captions, vttFilePath, outputPath)


@mcp.tool(name="save-formatted-transcript")
async def save_formatted_transcript_tool(
    content: str,
    filename: str,
    outputDir: str | None = None,
    videoTitle: str | None = None,
    videoUrl: str | None = None,
) -> str:
    """Save a formatted transcript (e.g. Markdown written by the agent) to the filesystem."""
    return await _run_tool(save_formatted_transcript, content, filename, outputDir, videoTitle, videoUrl)


@mcp.tool(name="health-check")
async def health_check_tool() -> str:
    """Check that the server and yt-dlp are available."""
    return json.dumps(await asyncio.to_thread(health_status), indent=2)


def main():
    logging.info("Starting YouTube Transcripts MCP server")
    mcp.run()


if __name__ == "__main__":
    main()
