"""
Step wizard state for the Streamlit app.

Every function takes a mutable mapping (``st.session_state`` in the app, a
plain dict in tests) and applies its changes in one go once a request
resolves. Errors never propagate out of here: they end up in
``state["error"]`` as a fixed Spanish message.
"""

import logging
from enum import IntEnum

from coach_service import DiagramGenerationError, PlanGenerationError
from preferences import (
    DEFAULT_DURATION,
    MISSING_SELECTION_MESSAGE,
    Difficulty,
    FreeTextPreferences,
    GroupSize,
    PreferenceError,
    SquadSize,
    StructuredPreferences,
    TrainingType,
    validate_duration,
)

logger = logging.getLogger(__name__)

FREE_MODE = "libre"
GUIDED_MODE = "guiado"

MISSING_API_KEY_MESSAGE = "No se ha configurado la clave de API (GEMINI_API_KEY)."
PLAN_FAILURE_MESSAGE = "Hubo un problema al generar el plan. Por favor, intenta de nuevo."
DIAGRAM_FAILURE_MESSAGE = "No se pudieron generar los diagramas. Inténtalo de nuevo."


class AppStep(IntEnum):
    START = 0
    TRAINING_TYPE = 1
    DIFFICULTY = 2
    DURATION = 3
    GROUP_SIZE = 4
    GENERATING = 5
    PLAN = 6


GUIDED_STEPS = (
    AppStep.TRAINING_TYPE,
    AppStep.DIFFICULTY,
    AppStep.DURATION,
    AppStep.GROUP_SIZE,
)

# session key and enum checked before leaving each guided step
STEP_FIELDS = {
    AppStep.TRAINING_TYPE: ("training_type", TrainingType),
    AppStep.DIFFICULTY: ("difficulty", Difficulty),
    AppStep.DURATION: ("duration", None),
    AppStep.GROUP_SIZE: ("group_size", GroupSize),
}


def default_state():
    return {
        "step": AppStep.START,
        "mode": FREE_MODE,
        "user_input": "",
        "squad_size": SquadSize.SOLO.value,
        "training_type": None,
        "difficulty": None,
        "duration": DEFAULT_DURATION,
        "group_size": None,
        "plan": None,
        "diagrams": None,
        "is_generating": False,
        "is_generating_diagrams": False,
        "error": None,
    }


def init_state(state):
    for key, value in default_state().items():
        if key not in state:
            state[key] = value


def reset(state):
    for key, value in default_state().items():
        state[key] = value


def last_interactive_step(state):
    return AppStep.GROUP_SIZE if state["mode"] == GUIDED_MODE else AppStep.START


def start_guided(state):
    state["mode"] = GUIDED_MODE
    state["error"] = None
    state["step"] = AppStep.TRAINING_TYPE


def start_free(state):
    state["mode"] = FREE_MODE
    state["error"] = None
    state["step"] = AppStep.START


def _validate_step(state, step):
    key, enum_cls = STEP_FIELDS[step]
    value = state.get(key)
    if enum_cls is None:
        validate_duration(value)
        return
    if value is None:
        raise PreferenceError(MISSING_SELECTION_MESSAGE)
    try:
        enum_cls(value)
    except ValueError as e:
        raise PreferenceError(MISSING_SELECTION_MESSAGE) from e


def advance(state):
    """Move to the next guided step if the current selection is valid."""
    step = state["step"]
    if step not in GUIDED_STEPS or step == AppStep.GROUP_SIZE:
        return False
    try:
        _validate_step(state, step)
    except PreferenceError as e:
        state["error"] = str(e)
        return False
    state["error"] = None
    state["step"] = AppStep(step + 1)
    return True


def go_back(state):
    step = state["step"]
    state["error"] = None
    if step == AppStep.TRAINING_TYPE:
        state["step"] = AppStep.START
    elif step in GUIDED_STEPS:
        state["step"] = AppStep(step - 1)


def current_preferences(state):
    """Build the submitted preferences; raises PreferenceError on invalid input."""
    if state["mode"] == GUIDED_MODE:
        return StructuredPreferences(
            training_type=state.get("training_type"),
            difficulty=state.get("difficulty"),
            duration=state.get("duration"),
            group_size=state.get("group_size"),
        )
    return FreeTextPreferences(
        description=state.get("user_input") or "",
        group_size=state.get("squad_size") or SquadSize.SOLO.value,
    )


def request_plan(state, client):
    """
    Validate, ask the client for a plan and move to the plan step.

    On any failure the step goes back to the last interactive step and
    ``state["error"]`` holds the message to show.
    """
    if state["is_generating"]:
        return False

    try:
        preferences = current_preferences(state)
    except PreferenceError as e:
        state["error"] = str(e)
        return False

    if client is None:
        state["error"] = MISSING_API_KEY_MESSAGE
        return False

    state["step"] = AppStep.GENERATING
    state["is_generating"] = True
    state["error"] = None
    try:
        plan = client.generate_plan(preferences)
    except PlanGenerationError:
        state["error"] = PLAN_FAILURE_MESSAGE
        state["step"] = last_interactive_step(state)
        return False
    finally:
        state["is_generating"] = False

    state["plan"] = plan
    state["diagrams"] = None
    state["step"] = AppStep.PLAN
    return True


def request_diagrams(state, client):
    """Ask for diagrams of the current plan; a failure keeps the plan on screen."""
    if not state.get("plan") or state["is_generating_diagrams"]:
        return False
    if client is None:
        state["error"] = MISSING_API_KEY_MESSAGE
        return False

    state["is_generating_diagrams"] = True
    state["error"] = None
    try:
        diagrams = client.generate_diagrams(state["plan"])
    except DiagramGenerationError:
        state["error"] = DIAGRAM_FAILURE_MESSAGE
        return False
    finally:
        state["is_generating_diagrams"] = False

    if not diagrams:
        logger.info("No diagrams available for this plan")
    state["diagrams"] = diagrams
    return True
