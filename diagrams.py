import logging

from plan_parser import clean_exercise_name

logger = logging.getLogger(__name__)


class DiagramSet:
    """
    SVG diagrams for the main-phase exercises of one plan.

    Named sets are looked up by cleaned exercise name; positional sets by the
    exercise's index among main-phase exercises. A miss is just ``None``.
    """

    def __init__(self, entries=(), keyed=False):
        self.entries = tuple(entries)
        self.keyed = keyed
        self._by_name = {name: svg for name, svg in self.entries} if keyed else {}

    @classmethod
    def from_named(cls, items):
        entries = []
        for item in items or ():
            if not isinstance(item, dict):
                continue
            name, svg = item.get("name"), item.get("svg")
            if not isinstance(name, str) or not isinstance(svg, str):
                continue
            name = clean_exercise_name(name)
            if name and svg.strip():
                entries.append((name, svg))
        return cls(entries, keyed=True)

    @classmethod
    def from_positional(cls, svgs, exercises):
        """Zip diagrams with the extracted exercises; any mismatch gives an empty set."""
        names = [name for name, _ in exercises]
        if not isinstance(svgs, list) or len(svgs) != len(names):
            logger.warning(
                f"Diagram count mismatch: expected {len(names)}, "
                f"got {len(svgs) if isinstance(svgs, list) else type(svgs).__name__}"
            )
            return cls()
        if not all(isinstance(svg, str) for svg in svgs):
            logger.warning("Diagram response contains non-string entries")
            return cls()
        return cls(zip(names, svgs), keyed=False)

    def lookup(self, name, position):
        if self.keyed:
            return self._by_name.get(clean_exercise_name(name))
        if 0 <= position < len(self.entries):
            return self.entries[position][1]
        return None

    def __len__(self):
        return len(self.entries)

    def __bool__(self):
        return bool(self.entries)

    def __eq__(self, other):
        if not isinstance(other, DiagramSet):
            return NotImplemented
        return self.entries == other.entries and self.keyed == other.keyed

    __hash__ = None

    def __repr__(self):
        mode = "named" if self.keyed else "positional"
        return f"DiagramSet({mode}, {len(self.entries)} diagrams)"
