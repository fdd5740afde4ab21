from dataclasses import dataclass
from enum import Enum

MIN_DURATION = 30
MAX_DURATION = 120
DEFAULT_DURATION = 60

EMPTY_DESCRIPTION_MESSAGE = "Por favor, describe qué te gustaría entrenar."
MISSING_SELECTION_MESSAGE = "Por favor, selecciona una opción para continuar."
DURATION_RANGE_MESSAGE = (
    f"La duración debe estar entre {MIN_DURATION} y {MAX_DURATION} minutos."
)


class PreferenceError(ValueError):
    """Invalid user input; the message is shown to the user as is."""


class TrainingType(str, Enum):
    TECNICA = "Técnica"
    RESISTENCIA = "Resistencia"
    TACTICA = "Táctica"
    FISICO = "Físico"
    COMBINADO = "Combinado"


class Difficulty(str, Enum):
    BASICO = "Básico"
    INTERMEDIO = "Intermedio"
    AVANZADO = "Avanzado"


class GroupSize(str, Enum):
    SOLO = "Solo"
    GRUPO = "En Grupo"


class SquadSize(str, Enum):
    """Group sizes offered next to the free-text description."""

    SOLO = "Solo"
    PEQUENO = "Grupo Pequeño"
    EQUIPO = "Equipo"


def _coerce(enum_cls, value):
    if value is None or value == "":
        raise PreferenceError(MISSING_SELECTION_MESSAGE)
    try:
        return enum_cls(value)
    except ValueError as e:
        raise PreferenceError(MISSING_SELECTION_MESSAGE) from e


@dataclass(frozen=True)
class FreeTextPreferences:
    description: str
    group_size: SquadSize = SquadSize.SOLO

    def __post_init__(self):
        if not self.description or not self.description.strip():
            raise PreferenceError(EMPTY_DESCRIPTION_MESSAGE)
        object.__setattr__(self, "description", self.description.strip())
        object.__setattr__(self, "group_size", _coerce(SquadSize, self.group_size))


@dataclass(frozen=True)
class StructuredPreferences:
    training_type: TrainingType
    difficulty: Difficulty
    duration: int
    group_size: GroupSize

    def __post_init__(self):
        object.__setattr__(
            self, "training_type", _coerce(TrainingType, self.training_type)
        )
        object.__setattr__(self, "difficulty", _coerce(Difficulty, self.difficulty))
        object.__setattr__(self, "group_size", _coerce(GroupSize, self.group_size))
        validate_duration(self.duration)


def validate_duration(duration):
    """Duration in whole minutes, bounded to the supported session length."""
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise PreferenceError(DURATION_RANGE_MESSAGE)
    if not MIN_DURATION <= duration <= MAX_DURATION:
        raise PreferenceError(DURATION_RANGE_MESSAGE)
    return duration
