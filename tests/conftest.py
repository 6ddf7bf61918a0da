import os
import subprocess
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from main import app

VIDEO_ID = "dQw4w9WgXcQ"

SAMPLE_VTT = """WEBVTT
Kind: captions
Language: en

00:00:00.000 --> 00:00:02.000 align:start position:0%
<00:00:00.500><c>hello</c><00:00:01.000><c> world</c>

00:00:02.000 --> 00:00:04.000
<00:00:02.500><c>second</c><00:00:03.000><c> line</c>

00:00:04.000 --> 00:00:06.000 align:start position:0%
<00:00:04.500><c>hello</c><00:00:05.000><c> world</c>
"""

@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c

@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT

@pytest.fixture
def vtt_file(tmp_path):
    path = tmp_path / "My_Video_dQw4w9WgXcQ.en.vtt"
    path.write_text(SAMPLE_VTT, encoding="utf-8")
    return path

def make_fake_ytdlp(files=(f"My Video_{VIDEO_ID}.en.vtt",), title="My Video", video_id=VIDEO_ID):
    """Stand-in for subprocess.run that answers like yt-dlp and writes caption files."""
    calls = []

    def fake_run(cmd, capture_output=True, text=True, timeout=None):
        calls.append(cmd)
        if "--version" in cmd:
            return subprocess.CompletedProcess(cmd, 0, stdout="2024.05.01\n", stderr="")
        if "--print" in cmd:
            return subprocess.CompletedProcess(cmd, 0, stdout=f"{title}\n{video_id}\n", stderr="")
        working_dir = os.path.dirname(cmd[cmd.index("-o") + 1])
        for name in files:
            with open(os.path.join(working_dir, name), "w", encoding="utf-8") as f:
                f.write(SAMPLE_VTT)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    fake_run.calls = calls
    return fake_run

@pytest.fixture
def fake_ytdlp():
    fake_run = make_fake_ytdlp()
    with patch("utils.youtube_utils.subprocess.run", side_effect=fake_run):
        yield fake_run

@pytest.fixture
def ytdlp_factory():
    return make_fake_ytdlp
