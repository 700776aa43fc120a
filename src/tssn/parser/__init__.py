"""Notation readers and the document parser."""

from tssn.parser.annotations import parse_annotations
from tssn.parser.constraints import parse_constraints
from tssn.parser.document import parse, parse_column_line, parse_table_constraint
from tssn.parser.identifier import parse_identifier, quote_identifier
from tssn.parser.type_expr import format_type, parse_type_expression

__all__ = [
    "parse",
    "parse_column_line",
    "parse_table_constraint",
    "parse_identifier",
    "quote_identifier",
    "parse_type_expression",
    "format_type",
    "parse_constraints",
    "parse_annotations",
]
