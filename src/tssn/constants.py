"""Base types and compiled patterns shared by the notation readers."""

import re

# The standard semantic base types. Unknown base names still parse.
BASE_TYPES = frozenset(
    {
        "int",
        "string",
        "decimal",
        "float",
        "number",
        "char",
        "text",
        "datetime",
        "date",
        "time",
        "boolean",
        "blob",
        "uuid",
        "json",
    }
)

# Column names rendered last when the generator sorts columns.
TIMESTAMP_COLUMNS = frozenset({"created_at", "updated_at", "deleted_at"})

_QUOTED = r"`((?:[^`]|``)*)`"
_SIMPLE = r"([A-Za-z_][A-Za-z0-9_]*)"
_LITERAL = r"(?:'[^']*'|-?\d+)"
_FK_ACTION = r"ON\s+(?:DELETE|UPDATE)\s+(?:CASCADE|RESTRICT|NO\s+ACTION|SET\s+NULL|SET\s+DEFAULT)"

SIMPLE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*")
QUOTED_IDENTIFIER = re.compile(r"^" + _QUOTED)
FULL_SIMPLE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

INTERFACE_DECL = re.compile(r"^interface\s+(?:" + _QUOTED + "|" + _SIMPLE + r")\s*\{")
INTERFACE_KEYWORD = re.compile(r"^interface\b")

# A lone literal is a one-value union.
UNION_TYPE = re.compile(r"^" + _LITERAL + r"(?:\s*\|\s*" + _LITERAL + r")*$")
SIMPLE_TYPE = re.compile(r"^(\w+)(?:\((\d+)\))?(\[\])?$")

PRIMARY_KEY = re.compile(r"\bPRIMARY\s+KEY\b|\bPK\b", re.IGNORECASE)
UNIQUE = re.compile(r"\bUNIQUE\b", re.IGNORECASE)
INDEX = re.compile(r"\bINDEX\b", re.IGNORECASE)
AUTO_INCREMENT = re.compile(r"\bAUTO_INCREMENT\b|\bIDENTITY\b", re.IGNORECASE)
FOREIGN_KEY = re.compile(
    r"(?:\bFK\b|\bFOREIGN\s+KEY\b)\s*->\s*"
    r"(?:(?:" + _QUOTED + "|" + r"(\w+)" + r")\.)?"
    r"(?:" + _QUOTED + "|" + r"(\w+)" + r")"
    r"\((?:" + _QUOTED + "|" + r"(\w+)" + r")\)"
    r"(?:\s*,?\s*(" + _FK_ACTION + r"(?:\s*,?\s*" + _FK_ACTION + r")*))?",
    re.IGNORECASE,
)
DEFAULT_VALUE = re.compile(r"\bDEFAULT\s+(.+?)(?:,|$)", re.IGNORECASE)
CHECK_IN = re.compile(r"\bCHECK\s+IN\s*\(([^)]+)\)", re.IGNORECASE)

ANNOTATION = re.compile(r"@(\w+):\s*(.+?)(?=,\s*@|\s*$)")
ANNOTATION_LINE = re.compile(r"^@\w+:")

TABLE_CONSTRAINT = re.compile(r"^(UNIQUE|INDEX)\s*\(([^)]+)\)$", re.IGNORECASE)
