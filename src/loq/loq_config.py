"""Loq session configuration."""

from dataclasses import dataclass


@dataclass
class LoqConfig:
    """Configuration for a Loq session and its REPL."""
    max_depth: int = 100
    debug: bool = False
    prompt: str = ">  "
    log_dir: str = "~/.loq/logs"
