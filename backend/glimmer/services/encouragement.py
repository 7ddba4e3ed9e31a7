"""Encouragement generator for low-mood check-ins.

Asks the LLM for one short, gentle sentence. Falls back to a fixed
per-mood sentence when the API key is missing, the call fails, or the
model returns nothing.
"""
import logging
import re
from typing import Optional

from openai import OpenAI

from glimmer.config import Settings, settings as app_settings

logger = logging.getLogger(__name__)

ENCOURAGED_MOODS = ("thinking", "tired", "sad")

SYSTEM_PROMPT = "You are an assistant that only replies with one short, gentle sentence of encouragement."

USER_PROMPT = """You are a gentle, restrained comforter. Reply with a single very short sentence of encouragement.

Current mood: {mood}

Requirements:
- One sentence only
- At most 20 words
- No exclamation marks
- No emoji
- Plain, warm tone; not overly upbeat
"""

_FALLBACKS = {
    "thinking": "Take your time, and give yourself some room to sort your thoughts.",
    "tired": "You have already worked hard, so let yourself rest for a while.",
    "sad": "Sadness is part of life too, and you don't have to carry it alone.",
}
_DEFAULT_FALLBACK = "No need to push yourself today; go at your own pace."


def needs_encouragement(mood: Optional[str]) -> bool:
    return mood in ENCOURAGED_MOODS


def default_encouragement(mood: str) -> str:
    return _FALLBACKS.get(mood, _DEFAULT_FALLBACK)


def _client(config: Settings) -> Optional[OpenAI]:
    if not config.OPENAI_API_KEY:
        return None
    return OpenAI(
        api_key=config.OPENAI_API_KEY,
        base_url=config.OPENAI_BASE_URL or None,
        timeout=30.0,
    )


def generate_encouragement(mood: str, config: Optional[Settings] = None) -> str:
    config = config or app_settings
    client = _client(config)
    if client is None:
        logger.info("OpenAI API key not configured; using default encouragement")
        return default_encouragement(mood)

    try:
        response = client.chat.completions.create(
            model=config.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(mood=mood)},
            ],
        )
    except Exception as e:
        logger.error("LLM API error while generating encouragement: %s", e)
        return default_encouragement(mood)

    text = (response.choices[0].message.content or "").strip() if response.choices else ""
    if not text:
        return default_encouragement(mood)
    return re.sub(r"\s+", " ", text)
