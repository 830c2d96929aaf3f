from dataclasses import dataclass


@dataclass
class RuntimeState:
    """Values probed once at startup; never written by request handlers"""
    ytdlp_version: str = "unknown"

state = RuntimeState()
