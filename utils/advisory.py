import asyncio
import logging
import os

from google import genai
from google.genai.errors import APIError

logger = logging.getLogger(__name__)

# --- CONFIGURATION ---
# Key stays in the environment, never in the repo.
API_KEY_ENV = "GEMINI_API_KEY"
MODEL_ENV = "KELLY_LAB_MODEL"
DEFAULT_MODEL = "gemini-2.5-flash"

SERVICE_UNAVAILABLE_MESSAGE = "Analysis service is temporarily unavailable (API error)."
EMPTY_RESPONSE_MESSAGE = "No analysis could be generated right now."


def build_prompt(win_probability: float, decimal_odds: float, kelly_fraction: float) -> str:
    return f"""
    I am running a Kelly Criterion investment simulation.

    Parameters:
    - Win rate: {win_probability * 100:.1f}%
    - Decimal odds: {decimal_odds:.2f} (net odds b = {decimal_odds - 1:.2f})
    - Computed Kelly fraction (f*): {kelly_fraction * 100:.2f}%

    Task:
    Give a short analysis (about 3 sentences) for someone learning risk management.
    1. Is this game worth playing? (Check whether the expected value / edge is > 0.)
    2. If the Kelly fraction is positive, explain why betting this exact fraction beats going all in.
    3. If the Kelly fraction is zero or negative, warn firmly why they should not play.

    Tone: educational, financially literate but plain-spoken.
    """


def request_analysis(win_probability: float, decimal_odds: float, kelly_fraction: float, client=None) -> str:
    """
    Asks the text model for advice on the current parameters.
    Never raises: any failure degrades to SERVICE_UNAVAILABLE_MESSAGE.
    """
    if client is None:
        api_key = os.getenv(API_KEY_ENV)
        if not api_key:
            logger.warning("%s not set; advisory disabled", API_KEY_ENV)
            return SERVICE_UNAVAILABLE_MESSAGE

    try:
        if client is None:
            client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=os.getenv(MODEL_ENV, DEFAULT_MODEL),
            contents=build_prompt(win_probability, decimal_odds, kelly_fraction),
        )
        return response.text or EMPTY_RESPONSE_MESSAGE

    except APIError as e:
        logger.error("Advisory API error: %s", e)
        return SERVICE_UNAVAILABLE_MESSAGE
    except Exception as e:
        logger.error("Advisory request failed: %s", e, exc_info=True)
        return SERVICE_UNAVAILABLE_MESSAGE


async def analyze_simulation(win_probability: float, decimal_odds: float, kelly_fraction: float, client=None) -> str:
    """Runs the blocking request off the event loop so playback and crash ticks keep going."""
    return await asyncio.to_thread(request_analysis, win_probability, decimal_odds, kelly_fraction, client)


class AdvisoryChannel:
    """
    One advice slot per page. invalidate() on every parameter change; an
    answer that comes back for superseded parameters is dropped (None).
    """

    def __init__(self, client=None):
        self.client = client
        self._generation = 0

    def invalidate(self):
        self._generation += 1

    async def request(self, win_probability: float, decimal_odds: float, kelly_fraction: float):
        token = self._generation
        text = await analyze_simulation(win_probability, decimal_odds, kelly_fraction, self.client)
        if token != self._generation:
            logger.debug("Dropping analysis for superseded parameters")
            return None
        return text
