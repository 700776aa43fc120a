"""Extraction of ``@name: value`` annotations from comment text."""

from __future__ import annotations

from typing import Iterable

from tssn.constants import ANNOTATION
from tssn.models import Annotation


def parse_annotations(comment: str) -> list[Annotation]:
    """Return every annotation in ``comment``, in order.

    A value runs until the next ``, @`` or the end of the comment.
    """
    if not comment or "@" not in comment:
        return []
    return [
        Annotation(name=match.group(1), value=match.group(2).strip())
        for match in ANNOTATION.finditer(comment)
    ]


def annotations_from_lines(lines: Iterable[str]) -> list[Annotation]:
    """Collect annotations across a block of comment lines."""
    annotations: list[Annotation] = []
    for line in lines:
        annotations.extend(parse_annotations(line))
    return annotations
