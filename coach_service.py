import json
import logging
import re

import google.generativeai as genai

from config import DEFAULT_MODEL, ConfigurationError
from diagrams import DiagramSet
from plan_parser import extract_main_exercises
from prompts import build_diagram_prompt, build_plan_prompt, diagram_schema

logger = logging.getLogger(__name__)


class PlanGenerationError(RuntimeError):
    """The text service failed or answered with nothing usable."""


class DiagramGenerationError(RuntimeError):
    """The structured diagram request failed or returned invalid JSON."""


def strip_code_fences(text):
    return re.sub(r"```json\n|```", "", text or "").strip()


class CoachClient:
    """
    Gemini client for plan text and exercise diagrams.

    The credential is passed in rather than read from the environment here;
    ``model`` lets tests inject a fake GenerativeModel.
    """

    def __init__(self, api_key, model_name=DEFAULT_MODEL, diagram_mode="positional", model=None):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is required")

        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.diagram_mode = diagram_mode
        self._model = model if model is not None else genai.GenerativeModel(model_name)
        logger.info(f"Initialized coach client with model: {model_name}")

    @classmethod
    def from_settings(cls, settings):
        return cls(
            settings.api_key,
            model_name=settings.model_name,
            diagram_mode=settings.diagram_mode,
        )

    @property
    def named_diagrams(self):
        return self.diagram_mode == "named"

    def generate_plan(self, preferences):
        """Send the preferences to Gemini and return the raw plan text."""
        prompt = build_plan_prompt(preferences)
        try:
            response = self._model.generate_content(prompt)
            text = response.text
        except Exception as e:
            logger.error(f"Error generating training plan: {e}")
            raise PlanGenerationError("plan request failed") from e

        if not text or not text.strip():
            logger.error("Training plan response was empty")
            raise PlanGenerationError("empty plan response")

        logger.info(f"Generated training plan: {len(text)} chars")
        return text

    def generate_diagrams(self, plan_text):
        """
        Request one SVG per main-phase exercise of ``plan_text``.

        Returns an empty DiagramSet when there is nothing to draw or the
        response cannot be aligned; raises DiagramGenerationError when the
        request itself fails.
        """
        exercises = extract_main_exercises(plan_text)
        if not exercises:
            logger.warning("No exercises found in the main training section to generate diagrams for.")
            return DiagramSet()

        named = self.named_diagrams
        prompt = build_diagram_prompt(exercises, named=named)
        config = genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=diagram_schema(named=named),
        )

        try:
            response = self._model.generate_content(prompt, generation_config=config)
            result = json.loads(strip_code_fences(response.text))
        except Exception as e:
            logger.error(f"Error generating diagrams: {e}")
            raise DiagramGenerationError("diagram request failed") from e

        return build_diagram_set(result, exercises, named=named)


def build_diagram_set(result, exercises, named=False):
    """Turn the decoded ``{"diagrams": [...]}`` payload into a DiagramSet."""
    items = result.get("diagrams") if isinstance(result, dict) else None
    if not isinstance(items, list):
        logger.warning("Diagram response has no 'diagrams' array")
        return DiagramSet()

    if named:
        diagrams = DiagramSet.from_named(items)
    else:
        diagrams = DiagramSet.from_positional(items, exercises)
    logger.info(f"Built {len(diagrams)} diagrams for {len(exercises)} exercises")
    return diagrams
