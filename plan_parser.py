"""
Best-effort parser for the plan text returned by Gemini.

The model is asked for a plain-text layout (title, total duration, three
numbered phases with ``Nombre: descripción`` lines) but often answers with
markdown, emoji keycaps or bullet lists instead. Every rule here is a
heuristic; unknown lines fall through as plain paragraphs and nothing raises.
"""

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    WARMUP = "warmup"
    MAIN = "main"
    COOLDOWN = "cooldown"
    OTHER = "other"


PHASE_LABELS = {
    Phase.WARMUP: "Calentamiento",
    Phase.MAIN: "Entrenamiento principal",
    Phase.COOLDOWN: "Enfriamiento",
    Phase.OTHER: "Otros",
}

# Matched against accent-folded, lower-cased text.
PHASE_KEYWORDS = (
    (Phase.COOLDOWN, re.compile(r"\b(?:enfriamiento|vuelta a la calma|cool[- ]?down)\b")),
    (Phase.WARMUP, re.compile(r"\b(?:calentamiento|activacion|warm[- ]?up)\b")),
    (Phase.MAIN, re.compile(r"\b(?:principal|parte central|main)\b")),
)
ORDINAL_PHASES = {1: Phase.WARMUP, 2: Phase.MAIN, 3: Phase.COOLDOWN}
PHASE_START_RE = re.compile(
    r"^(?:fase de |parte )?(?:calentamiento|entrenamiento principal|parte principal"
    r"|parte central|enfriamiento|vuelta a la calma)\b"
)

TITLE_RE = re.compile(r"^(?:(?:plan|sesion) de )?entrenamiento\b(?!\s+principal)")
DURATION_RE = re.compile(r"^(?:duracion(?: total)?|tiempo total|total duration)\b")
MINUTES_RE = re.compile(r"(\d+)\s*(?:min|')")
MINUTES_ONLY_RE = re.compile(r"\s*\(?\s*\d+(?:\s*-\s*\d+)?\s*(?:min\w*|')\s*\)?\.?\s*")

KEYCAP_RE = re.compile(r"^([0-9])\ufe0f?\u20e3\s*")
ORDINAL_RE = re.compile(r"^(\d{1,2})[.)]\s+")
LIST_MARKER_RE = re.compile(r"^(?:[-*+•·–—]|\d{1,2}[.)]|[a-zA-Z][.)])\s+")
BULLET_RE = re.compile(r"^[-*+•·–—]\s+")
BOLD_NAME_RE = re.compile(
    r"^(?:[-+•·]\s*|\*\s+|\d{1,2}[.)]\s*)?(?:\*\*|__)[^*_]+?(?:(?:\*\*|__)\s*:|:\s*(?:\*\*|__))"
)
EMPHASIS_CHARS_RE = re.compile(r"[*_`]")
HEADING_MARK_RE = re.compile(r"^#{1,6}\s*")


@dataclass(frozen=True)
class Heading:
    text: str
    phase: Phase = Phase.OTHER
    minutes: int | None = None


@dataclass(frozen=True)
class Paragraph:
    text: str
    emphasis: bool = False


@dataclass(frozen=True)
class Exercise:
    title: str
    description: str = ""
    phase: Phase = Phase.OTHER
    diagram: str | None = None

    @property
    def diagram_eligible(self):
        return self.phase is Phase.MAIN


@dataclass(frozen=True)
class ParsedPlan:
    title: str = ""
    content: tuple = ()

    @property
    def headings(self):
        return [block for block in self.content if isinstance(block, Heading)]

    @property
    def exercises(self):
        return [block for block in self.content if isinstance(block, Exercise)]

    @property
    def main_exercises(self):
        return [ex for ex in self.exercises if ex.diagram_eligible]


def fold(text):
    """Lower-case and drop accents so keyword checks survive ``Duración``/``DURACION``."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def _is_symbol(ch):
    # emoji bullets, variation selectors, joiners
    return ch.isspace() or ch in "\ufe0f\u200d" or unicodedata.category(ch) in ("So", "Sk")


def _strip_symbols(text):
    start, end = 0, len(text)
    while start < end and _is_symbol(text[start]):
        start += 1
    while end > start and _is_symbol(text[end - 1]):
        end -= 1
    return text[start:end]


def _strip_markdown(line):
    text = HEADING_MARK_RE.sub("", line.strip())
    return text.replace("**", "").replace("__", "").strip()


def strip_decoration(line):
    """Title/paragraph text without markdown emphasis, heading marks or emoji bullets."""
    return _strip_symbols(_strip_markdown(line)).strip()


def clean_exercise_name(raw):
    """
    Canonical exercise name: no list markers, no keycaps, no markdown emphasis.

    This is the join key between parsed exercises and named diagrams, so it is
    the only place a name is normalised and it is idempotent.
    """
    text = (raw or "").strip()
    previous = None
    while text != previous:
        previous = text
        text = KEYCAP_RE.sub("", text)
        text = EMPHASIS_CHARS_RE.sub("", text).strip()
        text = LIST_MARKER_RE.sub("", text)
        text = _strip_symbols(text)
        text = text.rstrip(":").strip()
    return text


def phase_for(label, ordinal=None):
    folded = fold(label)
    for phase, pattern in PHASE_KEYWORDS:
        if pattern.search(folded):
            return phase
    return ORDINAL_PHASES.get(ordinal, Phase.OTHER)


def _looks_like_phase(rest):
    name, sep, after = rest.partition(":")
    has_keyword = any(pattern.search(fold(name)) for _, pattern in PHASE_KEYWORDS)
    if sep:
        # "1. Calentamiento: 10 minutos" is a header, "1. Rondo: ..." is not
        return has_keyword and MINUTES_ONLY_RE.fullmatch(after) is not None
    return has_keyword or ("(" in rest and MINUTES_RE.search(rest) is not None)


def _heading(text, rest, ordinal):
    minutes = MINUTES_RE.search(rest)
    return Heading(
        text=text,
        phase=phase_for(rest, ordinal),
        minutes=int(minutes.group(1)) if minutes else None,
    )


def match_heading(raw, text):
    """Return a Heading for phase-header lines, otherwise None."""
    keycap = KEYCAP_RE.match(text)
    if keycap:
        return _heading(text, text[keycap.end():], int(keycap.group(1)))

    if raw.lstrip().startswith("#"):
        ordinal = ORDINAL_RE.match(text)
        return _heading(text, text, int(ordinal.group(1)) if ordinal else None)

    ordinal = ORDINAL_RE.match(text)
    if ordinal:
        rest = text[ordinal.end():]
        if _looks_like_phase(rest):
            return _heading(text, rest, int(ordinal.group(1)))
        return None

    if ":" not in text and MINUTES_RE.search(text) and PHASE_START_RE.match(fold(text)):
        return _heading(text, text, None)
    return None


def is_duration_line(text):
    return DURATION_RE.match(fold(strip_decoration(text))) is not None


def split_exercise(text):
    """Split ``name: description``; returns (name, description) or None."""
    name, sep, description = text.partition(":")
    if not sep:
        return None
    name = clean_exercise_name(name)
    if not name:
        return None
    return name, description.strip()


class _PlanBuilder:
    def __init__(self, diagrams=None):
        self.diagrams = diagrams
        self.title = ""
        self.title_by_position = False
        self.content = []
        self.phase = Phase.OTHER
        self.seen_phase = False
        self.main_index = 0
        self.lines_seen = 0
        self.open = None

    def accepts_title(self):
        if self.title and not self.title_by_position:
            return False
        if self.seen_phase or self.open is not None:
            return False
        return not any(isinstance(block, Exercise) for block in self.content)

    def close_exercise(self):
        if self.open is None:
            return
        self.content.append(
            Exercise(
                title=self.open["title"],
                description="\n".join(self.open["lines"]),
                phase=self.open["phase"],
                diagram=self.open["diagram"],
            )
        )
        self.open = None

    def set_title(self, text, by_position):
        if self.title and self.title_by_position and not by_position:
            self.content.insert(0, Paragraph(self.title))
        self.title = text
        self.title_by_position = by_position

    def heading(self, heading):
        self.close_exercise()
        self.phase = heading.phase
        self.seen_phase = True
        self.content.append(heading)

    def paragraph(self, text, emphasis=False):
        self.close_exercise()
        self.content.append(Paragraph(text, emphasis))

    def start_exercise(self, name, description, bold):
        self.close_exercise()
        diagram = None
        if self.phase is Phase.MAIN:
            if self.diagrams:
                diagram = self.diagrams.lookup(name, self.main_index)
            self.main_index += 1
        self.open = {
            "title": name,
            "lines": [description] if description else [],
            "phase": self.phase,
            "diagram": diagram,
            "bold": bold,
        }

    def continue_exercise(self, text):
        self.open["lines"].append(BULLET_RE.sub("", text))

    def build(self):
        self.close_exercise()
        return ParsedPlan(title=self.title, content=tuple(self.content))


def parse_plan(plan, diagrams=None):
    """
    Convert raw plan text into a ParsedPlan.

    ``diagrams`` is an optional DiagramSet; main-phase exercises pick their
    diagram from it by name or by position among main-phase exercises.
    """
    builder = _PlanBuilder(diagrams)
    lines = [line.strip() for line in (plan or "").splitlines() if line.strip()]

    for raw in lines:
        text = _strip_markdown(raw)
        if not text:
            continue
        first_line = builder.lines_seen == 0
        builder.lines_seen += 1
        display = strip_decoration(text)

        if builder.accepts_title() and TITLE_RE.match(fold(display)):
            builder.set_title(display, by_position=False)
            continue

        heading = match_heading(raw, text)
        if heading is not None:
            builder.heading(heading)
            continue

        if is_duration_line(text):
            builder.paragraph(display, emphasis=True)
            continue

        if first_line:
            builder.set_title(display, by_position=True)
            continue

        is_bullet = BULLET_RE.match(raw) is not None
        bold = BOLD_NAME_RE.match(raw) is not None
        if builder.open is not None and builder.open["bold"] and is_bullet and not bold:
            builder.continue_exercise(text)
            continue

        exercise = split_exercise(text)
        if exercise is not None:
            builder.start_exercise(*exercise, bold=bold)
            continue

        if builder.open is not None:
            builder.continue_exercise(text)
        else:
            builder.paragraph(BULLET_RE.sub("", display))

    return builder.build()


def extract_main_exercises(plan):
    """Ordered (name, description) pairs for the exercises of the main phase."""
    return [(ex.title, ex.description) for ex in parse_plan(plan).main_exercises]
