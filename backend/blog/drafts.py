from __future__ import annotations

import random

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import write_blog_post
from .models import BlogDraft

DRAFT_TOPICS = [
    "Best CAD Software for Beginners",
    "AutoCAD vs SolidWorks: Complete Comparison",
    "Free CAD Software That Rivals Premium Tools",
    "CAD Software for 3D Printing: Ultimate Guide",
    "Architecture CAD Software: Top 10 Picks",
    "Mechanical CAD Design Best Practices",
]

_TEMPLATE = """# {title}

Computer-Aided Design (CAD) software has changed the way engineers, architects, and designers create and modify designs. In this guide we look at the current options and what to consider before choosing one.

## Introduction

CAD tools keep gaining features. Whether you are learning CAD or upgrading a professional workflow, picking software that matches your work matters.

## Key Features to Consider

- **Ease of Use**: How intuitive is the interface?
- **Feature Set**: Does it include all the tools you need?
- **File Compatibility**: Can it work with industry-standard formats?
- **Cost**: Does it fit within your budget?

## Recommendations

Start with a free or trial version, model a real project from your own work, and compare how quickly you get to a usable result.

## Conclusion

The right CAD software depends on your use case, experience and budget. Take our quiz for a personalised shortlist.
"""


def _excerpt(content: str, limit: int = 160) -> str:
    for line in content.splitlines():
        text = line.strip()
        if text and not text.startswith(("#", "-", "*")):
            return text if len(text) <= limit else text[: limit - 3].rstrip() + "..."
    return ""


def build_draft(topic: str | None = None, config: LLMConfig = DEFAULT_LLM_CONFIG) -> BlogDraft:
    """Draft a post for *topic* (a random stock topic when omitted)."""
    title = (topic or "").strip() or random.choice(DRAFT_TOPICS)

    generated = write_blog_post(title, config=config)
    if generated:
        content = generated["content"]
        return BlogDraft(
            title=title,
            content=content,
            excerpt=generated.get("excerpt") or _excerpt(content),
            generated_by="llm",
        )

    content = _TEMPLATE.format(title=title)
    return BlogDraft(
        title=title,
        content=content,
        excerpt=_excerpt(content),
        generated_by="template",
    )
