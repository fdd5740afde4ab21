import pytest

from plan_parser import (
    Exercise,
    Heading,
    Paragraph,
    ParsedPlan,
    Phase,
    clean_exercise_name,
    extract_main_exercises,
    parse_plan,
)


def test_basic_plan_end_to_end(basic_plan):
    """Plain-text layout: title, duration, three phases, three exercises"""
    parsed = parse_plan(basic_plan)

    assert parsed.title == "Entrenamiento de Fútbol Nivel Básico"
    assert len(parsed.headings) == 3
    assert [h.phase for h in parsed.headings] == [Phase.WARMUP, Phase.MAIN, Phase.COOLDOWN]
    assert [h.minutes for h in parsed.headings] == [5, 30, 5]

    exercises = parsed.exercises
    assert [ex.title for ex in exercises] == ["Trote", "Regate", "Estiramiento"]
    assert [ex.diagram_eligible for ex in exercises] == [False, True, False]
    assert exercises[1].description == "Conducción de balón entre conos."


def test_basic_plan_block_order(basic_plan):
    """Blocks keep the order of the source lines"""
    parsed = parse_plan(basic_plan)

    kinds = [type(block) for block in parsed.content]
    assert kinds == [Paragraph, Heading, Exercise, Heading, Exercise, Heading, Exercise]
    assert parsed.content[0] == Paragraph("Duración total: 40 minutos", emphasis=True)


def test_markdown_plan(markdown_plan):
    """Bold names, emoji keycap headers and bullet continuations"""
    parsed = parse_plan(markdown_plan)

    assert parsed.title == "Entrenamiento de Fútbol Nivel Intermedio"
    assert [h.phase for h in parsed.headings] == [Phase.WARMUP, Phase.MAIN, Phase.COOLDOWN]
    assert [ex.title for ex in parsed.exercises] == [
        "Movilidad articular",
        "Rondo 4v1",
        "Pases largos",
        "Juego de posición 5v5+2",
        "Estiramientos estáticos",
    ]
    assert parsed.exercises[0].description == "Rotaciones de tobillo y cadera."
    assert parsed.exercises[2].description == "Parejas a 30 metros.\nSeries: 3 x 5 minutos."
    assert [ex.title for ex in parsed.main_exercises] == ["Pases largos", "Juego de posición 5v5+2"]


def test_empty_input():
    """Empty or blank input gives an empty plan"""
    assert parse_plan("") == ParsedPlan(title="", content=())
    assert parse_plan("   \n\n  ") == ParsedPlan(title="", content=())
    assert parse_plan(None) == ParsedPlan(title="", content=())


@pytest.mark.parametrize(
    "line",
    [
        "Duración total: 60 minutos",
        "DURACION TOTAL: 60 minutos",
        "**Duración total:** 60 minutos",
        "Tiempo total: 45 minutos",
        "Duración: 60 minutos",
        "⏱️ Duración total: 60 minutos",
    ],
)
def test_duration_line_is_never_an_exercise(line):
    """A colon inside the duration summary does not start an exercise"""
    text = "\n".join(
        [
            "Entrenamiento de Fútbol",
            "2. Entrenamiento principal (30 minutos)",
            "Regate: Conducción entre conos.",
            line,
        ]
    )
    parsed = parse_plan(text)

    assert [ex.title for ex in parsed.exercises] == ["Regate"]
    assert isinstance(parsed.content[-1], Paragraph)
    assert parsed.content[-1].emphasis is True


def test_total_time_inside_description_stays_an_exercise():
    """Only a line that starts with the duration label is the summary"""
    text = "\n".join(
        [
            "Entrenamiento",
            "2. Entrenamiento principal (30 minutos)",
            "Rondo 4v1: posesión en 10x10, tiempo total 8 minutos.",
            "Conducción: duración total de 5 minutos entre conos.",
            "Regate: conos.",
        ]
    )
    parsed = parse_plan(text)

    assert [ex.title for ex in parsed.main_exercises] == ["Rondo 4v1", "Conducción", "Regate"]
    assert not any(isinstance(block, Paragraph) for block in parsed.content)
    assert [name for name, _ in extract_main_exercises(text)] == ["Rondo 4v1", "Conducción", "Regate"]


def test_unstructured_text_falls_back_to_paragraphs():
    """Text without markers renders as a title plus paragraphs"""
    parsed = parse_plan("Hola\nEsto es un texto sin formato\nOtra línea más")

    assert parsed.title == "Hola"
    assert parsed.content == (
        Paragraph("Esto es un texto sin formato"),
        Paragraph("Otra línea más"),
    )
    assert parsed.exercises == []


def test_preamble_before_marker_title():
    """A chatty first line is demoted once the real title shows up"""
    text = "¡Claro! Aquí tienes tu plan\n**Entrenamiento de Fútbol Nivel Avanzado**\n1. Calentamiento (10 minutos)"
    parsed = parse_plan(text)

    assert parsed.title == "Entrenamiento de Fútbol Nivel Avanzado"
    assert parsed.content[0] == Paragraph("¡Claro! Aquí tienes tu plan")


def test_title_strips_emoji_decoration():
    parsed = parse_plan("⚽ **Entrenamiento de Fútbol Nivel Básico** ⚽\nTrote: suave.")

    assert parsed.title == "Entrenamiento de Fútbol Nivel Básico"


def test_description_continuation_lines():
    """Lines after an exercise extend its description"""
    text = "\n".join(
        [
            "Entrenamiento",
            "2. Entrenamiento principal (20 minutos)",
            "Regate: Conducción entre conos.",
            "Repetir 3 veces con ambas piernas.",
        ]
    )
    exercise = parse_plan(text).exercises[0]

    assert exercise.description == "Conducción entre conos.\nRepetir 3 veces con ambas piernas."


def test_numbered_exercises_are_not_headers():
    """'1. Rondo: ...' is an exercise, not a phase"""
    text = "\n".join(
        [
            "Entrenamiento de Fútbol",
            "2. Entrenamiento principal (30 minutos)",
            "1. Rondo: Mantener la posesión.",
            "2. Tiro a puerta: Finalización tras pase.",
        ]
    )
    parsed = parse_plan(text)

    assert len(parsed.headings) == 1
    assert [ex.title for ex in parsed.main_exercises] == ["Rondo", "Tiro a puerta"]


def test_phase_header_with_colon_duration():
    parsed = parse_plan("Entrenamiento\n1. Calentamiento: 10 minutos\nTrote: suave.")

    heading = parsed.headings[0]
    assert heading.phase is Phase.WARMUP
    assert heading.minutes == 10
    assert parsed.exercises[0].phase is Phase.WARMUP


def test_markdown_hash_headings():
    text = "\n".join(
        [
            "# Entrenamiento de Fútbol",
            "## Calentamiento",
            "Trote: suave.",
            "## Parte principal",
            "Regate: entre conos.",
            "## Vuelta a la calma",
            "Estirar: piernas.",
        ]
    )
    parsed = parse_plan(text)

    assert parsed.title == "Entrenamiento de Fútbol"
    assert [h.phase for h in parsed.headings] == [Phase.WARMUP, Phase.MAIN, Phase.COOLDOWN]
    assert [ex.title for ex in parsed.main_exercises] == ["Regate"]


def test_phase_falls_back_to_ordinal():
    """Unnamed numbered sections are classified by position"""
    text = "1. Bloque inicial (10 minutos)\nTrote: suave.\n2. Bloque técnico (20 minutos)\nRegate: conos."
    parsed = parse_plan(text)

    assert [h.phase for h in parsed.headings] == [Phase.WARMUP, Phase.MAIN]
    assert [ex.title for ex in parsed.main_exercises] == ["Regate"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("- **Regate**", "Regate"),
        ("**Regate:**", "Regate"),
        ("1. Rondo", "Rondo"),
        ("2) Tiro a puerta", "Tiro a puerta"),
        ("⚽ Pases", "Pases"),
        ("2️⃣ Conducción", "Conducción"),
        ("  *Juego reducido*  ", "Juego reducido"),
        ("• `Presión`", "Presión"),
    ],
)
def test_clean_exercise_name(raw, expected):
    assert clean_exercise_name(raw) == expected


@pytest.mark.parametrize("raw", ["- **Regate**:", "1. Rondo 4v1", "⚽ **Pases largos**", "Trote"])
def test_clean_exercise_name_is_idempotent(raw):
    once = clean_exercise_name(raw)
    assert clean_exercise_name(once) == once


def test_extracted_keys_match_parsed_titles(markdown_plan):
    """Extraction and rendering produce the same names in the same order"""
    extracted = extract_main_exercises(markdown_plan)

    assert [name for name, _ in extracted] == [ex.title for ex in parse_plan(markdown_plan).main_exercises]
    assert all(clean_exercise_name(name) == name for name, _ in extracted)


def test_extract_main_exercises_basic(basic_plan):
    assert extract_main_exercises(basic_plan) == [("Regate", "Conducción de balón entre conos.")]


def test_extract_main_exercises_without_main_phase():
    assert extract_main_exercises("Entrenamiento\n1. Calentamiento (5 minutos)\nTrote: suave.") == []
