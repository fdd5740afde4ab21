import pytest

from diagrams import DiagramSet
from plan_parser import extract_main_exercises, parse_plan


def test_positional_diagrams_align_in_order(markdown_plan):
    """N exercises and N diagrams: each main exercise gets its own, in order"""
    exercises = extract_main_exercises(markdown_plan)
    diagrams = DiagramSet.from_positional(["<svg>a</svg>", "<svg>b</svg>"], exercises)

    parsed = parse_plan(markdown_plan, diagrams)

    assert [ex.diagram for ex in parsed.main_exercises] == ["<svg>a</svg>", "<svg>b</svg>"]
    assert all(ex.diagram is None for ex in parsed.exercises if not ex.diagram_eligible)


def test_positional_fewer_diagrams_gives_empty_set(markdown_plan):
    exercises = extract_main_exercises(markdown_plan)

    diagrams = DiagramSet.from_positional(["<svg>a</svg>"], exercises)

    assert len(diagrams) == 0
    assert not diagrams
    assert all(ex.diagram is None for ex in parse_plan(markdown_plan, diagrams).exercises)


def test_positional_more_diagrams_gives_empty_set(basic_plan):
    exercises = extract_main_exercises(basic_plan)

    diagrams = DiagramSet.from_positional(["<svg>a</svg>", "<svg>b</svg>"], exercises)

    assert diagrams == DiagramSet()


def test_positional_rejects_non_string_entries(basic_plan):
    exercises = extract_main_exercises(basic_plan)

    assert not DiagramSet.from_positional([{"svg": "<svg/>"}], exercises)
    assert not DiagramSet.from_positional("<svg/>", exercises)


def test_named_diagrams_match_cleaned_names(markdown_plan):
    """Names coming back decorated still join against parsed titles"""
    diagrams = DiagramSet.from_named(
        [
            {"name": "**Pases largos**", "svg": "<svg>pases</svg>"},
            {"name": "Juego de posición 5v5+2", "svg": "<svg>juego</svg>"},
        ]
    )

    parsed = parse_plan(markdown_plan, diagrams)

    assert [ex.diagram for ex in parsed.main_exercises] == ["<svg>pases</svg>", "<svg>juego</svg>"]


def test_named_lookup_miss_degrades_to_no_diagram(markdown_plan):
    diagrams = DiagramSet.from_named([{"name": "Otro ejercicio", "svg": "<svg/>"}])

    parsed = parse_plan(markdown_plan, diagrams)

    assert all(ex.diagram is None for ex in parsed.exercises)


def test_named_skips_incomplete_items():
    diagrams = DiagramSet.from_named(
        [
            {"name": "Regate"},
            {"svg": "<svg/>"},
            {"name": "Tiro", "svg": None},
            "not a dict",
            {"name": "Pases", "svg": "<svg>ok</svg>"},
        ]
    )

    assert len(diagrams) == 1
    assert diagrams.lookup("Pases", 0) == "<svg>ok</svg>"


def test_lookup_out_of_range():
    diagrams = DiagramSet.from_positional(["<svg/>"], [("Regate", "")])

    assert diagrams.lookup("Regate", 0) == "<svg/>"
    assert diagrams.lookup("Regate", 1) is None
    assert diagrams.lookup("Regate", -1) is None


def test_diagram_set_is_unhashable():
    """Equality compares entries, so instances are not usable as dict keys"""
    assert DiagramSet() == DiagramSet()

    with pytest.raises(TypeError):
        hash(DiagramSet())
