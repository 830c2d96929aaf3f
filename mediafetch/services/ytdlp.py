import asyncio
import json
import logging
import os
from typing import Any, Dict, List, NamedTuple, Optional

from mediafetch.config.settings import config
from mediafetch.core.errors import FilesystemFailure, NoOutputFile, ParseFailure, ToolFailure, ToolTimeout
from mediafetch.models.request import MediaType

logger = logging.getLogger(__name__)


class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes


class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: Optional[float] = None,
        capture_stdout: bool = True
    ) -> CompletedProcess:
        """
        Run subprocess and wait for it to exit.
        A timeout of None waits indefinitely. The child is killed and reaped
        if the wait times out or the awaiting task is cancelled.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE if capture_stdout else asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
                stdin=asyncio.subprocess.DEVNULL
            )
        except OSError as e:
            raise ToolFailure(diagnostic=f"Cannot execute {cmd[0]}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout or b"",
                stderr=stderr or b""
            )

        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise ToolTimeout()
        except (Exception, asyncio.CancelledError):
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise


class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    @staticmethod
    def build_info_command(url: str) -> List[str]:
        """Build command for dumping metadata as a single JSON document"""
        return [config.ytdlp.binary, '-J', '--', url]

    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ytdlp.binary, '--version']

    @staticmethod
    def build_download_command(
        url: str,
        media_type: MediaType,
        format_id: Optional[str],
        destination_dir: str
    ) -> List[str]:
        """Build command downloading into destination_dir"""
        cmd = [
            config.ytdlp.binary,
            '-o', os.path.join(destination_dir, config.ytdlp.output_template),
        ]

        if media_type == MediaType.AUDIO:
            cmd.extend(['-x', '--audio-format', config.ytdlp.audio_format])
        elif format_id:
            # Video-only formats are merged with the best audio track
            cmd.extend(['-f', f'{format_id}+bestaudio'])

        cmd.extend(['--', url])
        return cmd


def _diagnostic(stderr: bytes) -> str:
    return stderr.decode(errors="replace").strip()


class MediaTool:
    """Adapter around the external downloader; one subprocess per call"""

    @staticmethod
    async def fetch_metadata(url: str) -> Dict[str, Any]:
        cmd = YTDLPCommandBuilder.build_info_command(url)
        result = await SubprocessExecutor.run(cmd, timeout=config.ytdlp.info_timeout_seconds)

        if result.returncode != 0:
            diagnostic = _diagnostic(result.stderr)
            logger.warning(f"Metadata lookup exited with {result.returncode}: {diagnostic[:200]}")
            raise ToolFailure(
                "Failed to get video info",
                diagnostic=diagnostic,
                returncode=result.returncode
            )

        try:
            document = json.loads(result.stdout.decode())
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseFailure(diagnostic=str(e)) from e

        if not isinstance(document, dict):
            raise ParseFailure(diagnostic="Metadata is not a JSON object")
        return document

    @staticmethod
    async def download_media(
        url: str,
        media_type: MediaType,
        format_id: Optional[str],
        destination_dir: str
    ) -> str:
        """Run a download into destination_dir and return the produced file path"""
        cmd = YTDLPCommandBuilder.build_download_command(url, media_type, format_id, destination_dir)
        try:
            result = await SubprocessExecutor.run(
                cmd,
                timeout=config.ytdlp.download_timeout_seconds,
                capture_stdout=False
            )
        except ToolTimeout:
            raise
        except ToolFailure as e:
            raise ToolFailure(
                e.diagnostic or "Failed to download media",
                diagnostic=e.diagnostic
            ) from e

        if result.returncode != 0:
            diagnostic = _diagnostic(result.stderr)
            raise ToolFailure(
                diagnostic or "Failed to download media",
                diagnostic=diagnostic,
                returncode=result.returncode
            )

        return find_output_file(destination_dir)

    @staticmethod
    async def probe_version() -> str:
        try:
            result = await SubprocessExecutor.run(YTDLPCommandBuilder.build_version_command(), timeout=15.0)
        except ToolFailure as e:
            logger.warning(f"{config.ytdlp.binary} unavailable: {e.diagnostic or e.message}")
            return "unknown"

        if result.returncode != 0:
            return "unknown"
        return result.stdout.decode(errors="replace").strip() or "unknown"


def find_output_file(directory: str) -> str:
    """First regular file in directory, in name order"""
    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        raise FilesystemFailure() from e

    for name in names:
        path = os.path.join(directory, name)
        if os.path.isfile(path):
            return path

    raise NoOutputFile()
