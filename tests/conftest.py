import json
import os
from typing import Dict, List, Optional

import pytest

from mediafetch.services.ytdlp import CompletedProcess, SubprocessExecutor

SAMPLE_DOCUMENT = {
    "title": "Sample Clip",
    "duration": 125,
    "formats": [
        {"format_id": "140", "ext": "m4a", "vcodec": "none", "acodec": "mp4a.40.2", "format_note": "medium"},
        {"format_id": "160", "ext": "mp4", "vcodec": "avc1", "acodec": "none", "height": 144},
        {"format_id": "278", "ext": "webm", "vcodec": "vp9", "acodec": "none", "height": 144},
        {"format_id": "136", "ext": "mp4", "vcodec": "avc1", "acodec": "none", "height": 720},
        {"format_id": "sb0", "ext": "mhtml", "vcodec": "images"},
    ],
}


class FakeTool:
    """Stands in for the external downloader by answering SubprocessExecutor.run"""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.workspaces: List[str] = []
        self.info_stdout: bytes = json.dumps(SAMPLE_DOCUMENT).encode()
        self.info_returncode = 0
        self.info_stderr = b""
        self.download_returncode = 0
        self.download_stderr = b""
        self.output_files: Dict[str, bytes] = {"Sample Clip.mp4": b"\x00\x01video-bytes"}

    async def run(self, cmd: List[str], timeout: Optional[float] = None, capture_stdout: bool = True):
        self.calls.append(list(cmd))

        if "-J" in cmd:
            return CompletedProcess(self.info_returncode, self.info_stdout, self.info_stderr)

        workspace = os.path.dirname(cmd[cmd.index("-o") + 1])
        self.workspaces.append(workspace)
        if self.download_returncode == 0:
            for name, data in self.output_files.items():
                with open(os.path.join(workspace, name), "wb") as f:
                    f.write(data)
        return CompletedProcess(self.download_returncode, b"", self.download_stderr)

    @property
    def download_calls(self) -> List[List[str]]:
        return [cmd for cmd in self.calls if "-J" not in cmd]


@pytest.fixture
def fake_tool(monkeypatch):
    tool = FakeTool()
    monkeypatch.setattr(SubprocessExecutor, "run", staticmethod(tool.run))
    return tool
