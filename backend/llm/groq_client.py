from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

EXPLAIN_PROMPT = (
    "You are a CAD software advisor. "
    "Given a user's quiz answers and a ranked list of recommended CAD tools, "
    "write a short, friendly one-sentence explanation of why each tool fits. "
    "Do not change the ranking.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"recommendations": [{"id": "<software_id>", "reason": "<one sentence>"}]}\n'
    "Include only tools from the provided list."
)

DRAFT_PROMPT = (
    "You are a technical writer for a CAD software guide. "
    "Write a helpful blog post in Markdown for the given title. "
    "Use a level-one heading with the title, a short introduction, "
    "two to four sections with level-two headings and a conclusion.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"content": "<markdown>", "excerpt": "<one or two sentences>"}'
)


def _build_explain_message(
    answers: dict[str, Any],
    candidates: list[dict[str, Any]],
) -> str:
    lines = ["## Quiz Answers"]
    if answers.get("primary_use"):
        lines.append(f"- Primary use: {answers['primary_use']}")
    if answers.get("experience"):
        lines.append(f"- Experience: {answers['experience']}")
    if answers.get("budget") is not None:
        lines.append(f"- Monthly budget: ${answers['budget']}")
    if answers.get("platform"):
        lines.append(f"- Platform: {answers['platform']}")
    if answers.get("features"):
        lines.append(f"- Important features: {', '.join(answers['features'])}")

    lines.append("\n## Recommended Tools")
    lines.append("| ID | Name | Price | Difficulty | Rating | Platforms |")
    lines.append("|---|---|---|---|---|---|")
    for c in candidates:
        name = c["name"] if not c.get("version") else f"{c['name']} {c['version']}"
        platforms_str = ", ".join(c.get("platforms", []))
        lines.append(
            f"| {c['id']} | {name} | {c.get('price', 'N/A')} "
            f"| {c.get('difficulty', '?')} | {c.get('rating', 'N/A')} | {platforms_str} |"
        )

    return "\n".join(lines)


def _complete_json(
    config: LLMConfig,
    system_prompt: str,
    user_message: str,
    max_tokens: int,
    temperature: float,
) -> dict[str, Any]:
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        max_tokens=max_tokens,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or ""
    return json.loads(content)


def explain_recommendations(
    answers: dict[str, Any],
    candidates: list[dict[str, Any]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, str]:
    """
    Ask the LLM for a one-sentence reason per recommended tool.

    Returns a dict mapping software id -> reason string.
    Returns empty dict on any failure (timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        return {}

    if not candidates:
        return {}

    try:
        parsed = _complete_json(
            config,
            EXPLAIN_PROMPT,
            _build_explain_message(answers, candidates),
            max_tokens=config.max_tokens,
            temperature=config.explain_temperature,
        )

        known_ids = {str(c["id"]) for c in candidates}
        results: dict[str, str] = {}
        for item in parsed.get("recommendations", []):
            sid = str(item.get("id", ""))
            reason = item.get("reason", "")
            if sid in known_ids and reason:
                results[sid] = reason

        return results

    except Exception:
        logger.warning("Groq LLM call failed, returning recommendations without reasons", exc_info=True)
        return {}


def write_blog_post(
    title: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, str]:
    """
    Ask the LLM for a Markdown blog post.

    Returns ``{"content": ..., "excerpt": ...}`` or an empty dict when the
    LLM is disabled or fails.
    """
    if not config.enabled or not config.api_key:
        return {}

    try:
        parsed = _complete_json(
            config,
            DRAFT_PROMPT,
            f"Title: {title}",
            max_tokens=config.draft_max_tokens,
            temperature=config.draft_temperature,
        )
        content = str(parsed.get("content", "")).strip()
        if not content:
            return {}
        return {"content": content, "excerpt": str(parsed.get("excerpt", "")).strip()}

    except Exception:
        logger.warning("Groq LLM call failed, falling back to templated draft", exc_info=True)
        return {}
