from fastapi import APIRouter
from pydantic import BaseModel
import asyncio
import logging
import os
import uuid

from config import CAPTIONS_OUTPUT_DIR
from exceptions.custom_exceptions import CaptionError, CaptionDownloadError, CaptionReadError, CaptionSaveError
from utils.file_utils import save_to_filesystem, create_timestamped_filename
from utils.summary_utils import generate_summary
from utils.text_utils import clean_vtt_file, read_caption_file, join_captions, get_caption_stats
from utils.youtube_utils import download_youtube_captions, extract_video_title, check_ytdlp

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

router = APIRouter()

TEXT_PREVIEW_CHARS = 2000
CLEAN_PREVIEW_CHARS = 500
TOOL_NAMES = [
    "process-youtube-captions",
    "download-youtube-captions",
    "clean-vtt-file",
    "save-formatted-transcript",
    "health-check",
]


class ProcessCaptionsInput(BaseModel):
    url: str
    outputDir: str | None = None
    filename: str | None = None
    includeRawCaptions: bool = False
    includeSummary: bool = False


class DownloadCaptionsInput(BaseModel):
    url: str
    outputDir: str | None = None


class CleanCaptionsInput(BaseModel):
    vttFilePath: str
    outputPath: str | None = None


class SaveTranscriptInput(BaseModel):
    content: str
    filename: str
    outputDir: str | None = None
    videoTitle: str | None = None
    videoUrl: str | None = None


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def process_youtube_captions(
    url: str,
    output_dir: str | None = None,
    filename: str | None = None,
    include_raw_captions: bool = False,
    include_summary: bool = False,
    request_id: str | None = None,
) -> dict:
    """
    Download, clean and save the captions of a YouTube video.

    Every file lands in the session folder created by the download step.
    Failures are raised as CaptionError subclasses that name the failing
    stage and carry the request id.
    """
    request_id = request_id or new_request_id()
    base_dir = output_dir or CAPTIONS_OUTPUT_DIR
    error_cls = CaptionDownloadError
    logging.info(
        f"[{request_id}] Starting YouTube caption processing: url={url}, outputDir={base_dir}, "
        f"filename={filename}, includeRawCaptions={include_raw_captions}, includeSummary={include_summary}"
    )
    try:
        vtt_path = download_youtube_captions(url, base_dir)

        error_cls = CaptionReadError
        captions = clean_vtt_file(vtt_path)
        caption_text = join_captions(captions)
        stats = get_caption_stats(captions)

        error_cls = CaptionSaveError
        video_title = extract_video_title(vtt_path)
        base_filename = filename or create_timestamped_filename(video_title or 'youtube_captions')
        stem = os.path.splitext(base_filename)[0]
        session_folder = os.path.dirname(vtt_path)

        cleaned_text_path = save_to_filesystem(caption_text, base_filename, session_folder)

        raw_captions_path = None
        if include_raw_captions:
            raw_captions_path = save_to_filesystem(read_caption_file(vtt_path), f"{stem}_raw.vtt", session_folder)

        summary_path = None
        summary = None
        if include_summary:
            summary = generate_summary(caption_text)
            summary_path = save_to_filesystem(summary["summary"], f"{stem}_summary.md", session_folder)
    except CaptionError as e:
        logging.error(f"[{request_id}] YouTube caption processing failed: {e.message}")
        raise e.with_request_id(request_id)
    except Exception as e:
        logging.error(f"[{request_id}] Unexpected error during caption processing: {str(e)}", exc_info=True)
        raise error_cls(f"Unexpected error: {str(e)}", request_id=request_id) from e

    logging.info(
        f"[{request_id}] YouTube caption processing completed: cleanedTextPath={cleaned_text_path}, "
        f"rawCaptionsPath={raw_captions_path}, stats={stats}"
    )
    return {
        "success": True,
        "requestId": request_id,
        "url": url,
        "videoTitle": video_title,
        "stats": stats,
        "sessionFolder": session_folder,
        "cleanedTextPath": cleaned_text_path,
        "rawCaptionsPath": raw_captions_path,
        "summaryPath": summary_path,
        "summary": summary,
        "text": caption_text[:TEXT_PREVIEW_CHARS],
        "truncated": len(caption_text) > TEXT_PREVIEW_CHARS,
    }


def download_captions(url: str, output_dir: str | None = None) -> dict:
    try:
        vtt_path = download_youtube_captions(url, output_dir or CAPTIONS_OUTPUT_DIR)
    except CaptionError:
        raise
    except Exception as e:
        logging.error(f"Unexpected error downloading captions for {url}: {str(e)}", exc_info=True)
        raise CaptionDownloadError(f"Unexpected error: {str(e)}") from e
    return {
        "success": True,
        "videoTitle": extract_video_title(vtt_path),
        "captionPath": vtt_path,
    }


def clean_captions(vtt_file_path: str, output_path: str | None = None) -> dict:
    try:
        captions = clean_vtt_file(vtt_file_path, output_path)
    except CaptionError:
        raise
    except Exception as e:
        logging.error(f"Unexpected error cleaning {vtt_file_path}: {str(e)}", exc_info=True)
        raise CaptionReadError(f"Unexpected error: {str(e)}") from e
    caption_text = join_captions(captions)
    return {
        "success": True,
        "inputFile": vtt_file_path,
        "outputFile": output_path,
        "stats": get_caption_stats(captions),
        "preview": caption_text[:CLEAN_PREVIEW_CHARS],
        "truncated": len(caption_text) > CLEAN_PREVIEW_CHARS,
    }


def save_formatted_transcript(
    content: str,
    filename: str,
    output_dir: str | None = None,
    video_title: str | None = None,
    video_url: str | None = None,
) -> dict:
    logging.info(f"Saving formatted transcript: filename={filename}, outputDir={output_dir}")
    saved_path = save_to_filesystem(content, filename, output_dir or CAPTIONS_OUTPUT_DIR)
    logging.info(f"Formatted transcript saved successfully: {saved_path}")
    return {
        "success": True,
        "path": saved_path,
        "characters": len(content),
        "videoTitle": video_title,
        "videoUrl": video_url,
    }


def health_status() -> dict:
    try:
        version = check_ytdlp()
    except CaptionError as e:
        logging.warning(f"Health check: {e.message}")
        return {
            "status": "degraded",
            "service": "youtube-transcripts",
            "ytDlp": None,
            "error": e.message,
            "tools": TOOL_NAMES,
        }
    return {
        "status": "healthy",
        "service": "youtube-transcripts",
        "ytDlp": version,
        "tools": TOOL_NAMES,
    }


@router.post("/process")
async def process_captions_endpoint(input: ProcessCaptionsInput):
    return await asyncio.to_thread(
        process_youtube_captions,
        input.url,
        input.outputDir,
        input.filename,
        input.includeRawCaptions,
        input.includeSummary,
    )


@router.post("/download")
async def download_captions_endpoint(input: DownloadCaptionsInput):
    return await asyncio.to_thread(download_captions, input.url, input.outputDir)


@router.post("/clean")
async def clean_captions_endpoint(input: CleanCaptionsInput):
    return await asyncio.to_thread(clean_captions, input.vttFilePath, input.outputPath)


@router.post("/save-formatted")
async def save_formatted_endpoint(input: SaveTranscriptInput):
    return await asyncio.to_thread(
        save_formatted_transcript,
        input.content,
        input.filename,
        input.outputDir,
        input.videoTitle,
        input.videoUrl,
    )
