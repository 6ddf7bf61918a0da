import os
from unittest.mock import patch

URL = "https://youtu.be/dQw4w9WgXcQ"


def test_process_captions(client, fake_ytdlp, tmp_path):
    resp = client.post("/captions/process", json={
        "url": URL,
        "outputDir": str(tmp_path),
        "includeRawCaptions": True,
        "includeSummary": True,
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["requestId"]
    assert body["videoTitle"] == "My Video dQw4w9WgXcQ"
    assert body["stats"]["totalLines"] == 2
    assert body["text"] == "hello world second line"
    assert body["truncated"] is False

    assert os.path.dirname(body["sessionFolder"]) == str(tmp_path)
    assert os.path.dirname(body["cleanedTextPath"]) == body["sessionFolder"]
    with open(body["cleanedTextPath"], encoding="utf-8") as f:
        assert f.read() == "hello world second line"
    assert body["rawCaptionsPath"].endswith("_raw.vtt")
    with open(body["rawCaptionsPath"], encoding="utf-8") as f:
        assert f.read().startswith("WEBVTT")
    assert body["summaryPath"].endswith("_summary.md")
    assert os.path.exists(body["summaryPath"])


def test_process_captions_with_filename(client, fake_ytdlp, tmp_path):
    resp = client.post("/captions/process", json={"url": URL, "outputDir": str(tmp_path), "filename": "notes"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["cleanedTextPath"].endswith("notes.txt")
    assert body["rawCaptionsPath"] is None
    assert body["summaryPath"] is None


def test_process_captions_uses_configured_directory(client, fake_ytdlp, tmp_path):
    with patch("services.caption_service.CAPTIONS_OUTPUT_DIR", str(tmp_path)):
        resp = client.post("/captions/process", json={"url": URL})
    assert resp.status_code == 200
    assert os.path.dirname(resp.json()["sessionFolder"]) == str(tmp_path)


def test_process_captions_invalid_url(client, tmp_path):
    resp = client.post("/captions/process", json={"url": "https://example.com/video", "outputDir": str(tmp_path)})
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["success"] is False
    assert detail["stage"] == "acquisition"
    assert "Invalid YouTube URL provided" in detail["message"]
    assert detail["requestId"]


def test_process_captions_save_failure(client, fake_ytdlp, tmp_path):
    with patch("utils.file_utils.open", side_effect=PermissionError("read-only"), create=True):
        resp = client.post("/captions/process", json={"url": URL, "outputDir": str(tmp_path)})
    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail["stage"] == "persistence"
    assert detail["message"] == "Failed to save file: read-only"


def test_download_captions(client, fake_ytdlp, tmp_path):
    resp = client.post("/captions/download", json={"url": URL, "outputDir": str(tmp_path)})
    assert resp.status_code == 200
    body = resp.json()
    assert body["captionPath"].endswith(".en.vtt")
    assert os.path.exists(body["captionPath"])


def test_clean_captions(client, vtt_file, tmp_path):
    output = tmp_path / "out.txt"
    resp = client.post("/captions/clean", json={"vttFilePath": str(vtt_file), "outputPath": str(output)})
    assert resp.status_code == 200
    body = resp.json()
    assert body["stats"]["totalLines"] == 2
    assert body["stats"]["totalWords"] == 4
    assert body["preview"] == "hello world second line"
    assert output.read_text(encoding="utf-8") == "hello world\nsecond line\n"


def test_clean_captions_missing_file(client, tmp_path):
    resp = client.post("/captions/clean", json={"vttFilePath": str(tmp_path / "missing.vtt")})
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["stage"] == "cleaning"
    assert detail["message"].startswith("Failed to clean VTT file:")


def test_save_formatted_transcript(client, tmp_path):
    resp = client.post("/captions/save-formatted", json={
        "content": "# My Video\n\nhello world",
        "filename": "my_video.md",
        "outputDir": str(tmp_path),
        "videoTitle": "My Video",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["path"] == os.path.join(str(tmp_path), "my_video.md")
    assert body["characters"] == len("# My Video\n\nhello world")
    assert body["videoTitle"] == "My Video"


def test_save_formatted_transcript_failure(client, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    resp = client.post("/captions/save-formatted", json={
        "content": "text",
        "filename": "out.md",
        "outputDir": str(blocker),
    })
    assert resp.status_code == 500
    assert resp.json()["detail"]["stage"] == "persistence"
