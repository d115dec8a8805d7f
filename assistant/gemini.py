"""
Edge-list generation using the Gemini generateContent API.

The model is asked for nothing but `node1 node2 weight` lines.  Whatever
comes back is returned as text; the normal edge-list parser decides what
survives.
"""

import json
import logging
import time
from typing import Optional

import requests

import config
from graph import parse_edge_list

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Generate an adjacency list for a graph based on the following description. "
    'The format for each line must be exactly "node1 node2 weight", where weight is '
    "an integer between 1 and 20. Do not add any other text, explanations, or "
    "formatting. The graph should have between 5 and 15 nodes. "
    'Description: "{description}"'
)


class AssistantError(RuntimeError):
    """The generative service could not produce usable edge-list text."""


def build_prompt(description: str) -> str:
    return PROMPT_TEMPLATE.format(description=description.strip())


def _strip_fences(text: str) -> str:
    # models sometimes wrap the answer in a markdown code block anyway
    lines = [line for line in text.strip().splitlines() if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def generate_edge_list(
    description: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
    max_retries: int = 3,
) -> str:
    """
    Ask Gemini for an edge list matching `description`.

    Retries on rate limits (429) with exponential backoff.

    Returns:
        The generated text, trimmed.

    Raises:
        AssistantError: missing key, HTTP failure, timeout, or a response
            with no parsable edge.
    """
    if not description or not description.strip():
        raise AssistantError("Describe the graph you want first.")

    api_key = api_key or config.GEMINI_API_KEY
    if not api_key:
        raise AssistantError("GEMINI_API_KEY not set. Add it to .env file.")

    model = model or config.GEMINI_MODEL
    timeout = timeout or config.GEMINI_TIMEOUT
    payload = {"contents": [{"role": "user", "parts": [{"text": build_prompt(description)}]}]}

    last_error: Optional[AssistantError] = None
    for attempt in range(max_retries):
        start_time = time.time()
        try:
            response = requests.post(
                f"{config.GEMINI_BASE_URL}/{model}:generateContent",
                params={"key": api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
                timeout=timeout,
            )
        except requests.exceptions.Timeout:
            last_error = AssistantError("Request timed out")
            continue
        except requests.exceptions.RequestException as e:
            raise AssistantError(f"Could not reach Gemini: {e}") from e

        logger.debug("Gemini responded %d in %.2fs", response.status_code, time.time() - start_time)

        if response.status_code == 429:
            last_error = AssistantError(f"Rate limited: {response.text[:100]}")
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt  # 1s, 2s
                logger.debug("Rate limited, waiting %ds before retry %d/%d", wait_time, attempt + 2, max_retries)
                time.sleep(wait_time)
            continue

        if response.status_code != 200:
            raise AssistantError(f"Gemini API error {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("Unexpected Gemini response structure: %s", response.text[:300])
            raise AssistantError("Unexpected response structure from Gemini") from e
        break
    else:
        logger.warning("Gemini call failed after %d attempts: %s", max_retries, last_error)
        raise last_error or AssistantError("All retries exhausted")

    text = _strip_fences(text)
    _, edges = parse_edge_list(text)
    if not edges:
        logger.warning("Gemini returned no usable edges: %s", json.dumps(text[:200]))
        raise AssistantError("The generated text contained no valid edges.")

    logger.info("Generated edge list with %d edges (model=%s)", len(edges), model)
    return text
