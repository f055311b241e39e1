from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class LLMConfig:
    """
    Groq settings shared by recommendation reasons and blog drafts.

    ``LLM_ENABLED=false`` turns both features into their non-LLM fallbacks
    without removing the API key.
    """

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 1024
    explain_temperature: float = 0.3
    draft_max_tokens: int = 2048
    draft_temperature: float = 0.7
    enabled: bool = _env_flag("LLM_ENABLED")


DEFAULT_LLM_CONFIG = LLMConfig()
