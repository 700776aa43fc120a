"""TypeScript-Style Schema Notation: parse, generate and map relational schemas.

Example:
    >>> from tssn import parse, generate
    >>> schema = parse("interface Users {\\n  id: int; // PRIMARY KEY\\n}")
    >>> schema.tables[0].columns[0].primary_key
    True
    >>> generate(schema).splitlines()[0]
    'interface Users {'
"""

from tssn.config.settings import get_default_dialect, validate_configuration
from tssn.ddl_import import import_ddl
from tssn.dialect import SUPPORTED_DIALECTS, normalize_dialect
from tssn.errors import ParseErrorCode, TSSNParseError
from tssn.generator import generate, generate_table
from tssn.models import (
    Annotation,
    AutoIncrementConstraint,
    CheckConstraint,
    Column,
    ColumnType,
    Constraint,
    DefaultConstraint,
    ForeignKeyConstraint,
    GeneratorOptions,
    IndexConstraint,
    ParseOptions,
    PrimaryKeyConstraint,
    Schema,
    SimpleType,
    Table,
    TableConstraint,
    UnionType,
    UniqueConstraint,
)
from tssn.parser import parse
from tssn.type_mapper import MappedType, map_type

__all__ = [
    # Core operations
    "parse",
    "generate",
    "generate_table",
    "map_type",
    "import_ddl",
    "normalize_dialect",
    "SUPPORTED_DIALECTS",
    # Configuration
    "validate_configuration",
    "get_default_dialect",
    # Errors
    "TSSNParseError",
    "ParseErrorCode",
    # Models
    "Schema",
    "Table",
    "Column",
    "ColumnType",
    "SimpleType",
    "UnionType",
    "Constraint",
    "PrimaryKeyConstraint",
    "UniqueConstraint",
    "IndexConstraint",
    "AutoIncrementConstraint",
    "ForeignKeyConstraint",
    "DefaultConstraint",
    "CheckConstraint",
    "TableConstraint",
    "Annotation",
    "ParseOptions",
    "GeneratorOptions",
    "MappedType",
]
