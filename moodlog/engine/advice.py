import json
import logging
from typing import Optional

from openai import AsyncOpenAI

from moodlog.config import Settings

logger = logging.getLogger(__name__)

NO_ADVICE = "No advice could be generated."


class AdviceGenerator:
    """Generates a free-text recommendation from one day's entry data."""

    SYSTEM_PROMPT = """You are a supportive mental-health coach reviewing a user's daily check-in.

The check-in is sent as JSON. Ratings are on a 1-10 scale (mood_rating: 10=great,
anxiety_level/stress_level: 10=severe), sleep_hours is in hours, activity_duration in
minutes, and symptom severities are 0-10.

Respond in plain text:
- Open with one short sentence acknowledging how the day went
- Then give 3-5 numbered, practical suggestions in the form "1. Title: explanation"
- You may start a suggestion with a single emoji
- Finish with: Here's your tip for the day: "<one short tip>"

You are NOT a doctor. If symptoms look severe, gently suggest talking to a professional."""

    def __init__(self, settings: Settings):
        self.model = settings.advice_model
        self.max_tokens = settings.advice_max_tokens
        self.client: Optional[AsyncOpenAI] = None
        if settings.advice_enabled and settings.openai_api_key:
            self.client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.advice_base_url,
                timeout=settings.advice_timeout_seconds,
            )
        else:
            logger.info("Advice generation disabled, entries get placeholder advice")

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def generate(self, payload: dict) -> str:
        """Ask the model for advice. Never raises; falls back to NO_ADVICE."""
        if self.client is None:
            return NO_ADVICE

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.SYSTEM_PROMPT},
                    {"role": "user", "content": json.dumps(payload, default=str)}
                ],
                temperature=0.7,
                max_tokens=self.max_tokens
            )
            content = response.choices[0].message.content if response.choices else None
        except Exception as e:
            logger.warning(f"Advice generation failed: {type(e).__name__}: {e}")
            return NO_ADVICE

        if not content or not content.strip():
            return NO_ADVICE
        return content.strip()

    async def close(self):
        if self.client is not None:
            await self.client.close()
