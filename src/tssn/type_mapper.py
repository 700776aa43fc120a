"""Map vendor SQL type names onto the notation's semantic base types.

Each dialect is one :class:`DialectTypeTable` (type names, format hints,
length-preserving names). A short ordered list of exception rules runs
before the table lookup for cases a plain lookup cannot express:

- MySQL ``TINYINT(1)`` is a boolean flag.
- SQL Server ``VARCHAR(MAX)`` / ``NVARCHAR(MAX)`` (length ``-1``) is text.
- Oracle ``NUMBER(p[, s])`` is ``int`` without scale and ``decimal`` with it;
  a bare ``NUMBER`` stays the generic ``number``.

Unknown type names map to ``string``; the mapper never fails on them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from tssn.dialect import Dialect, normalize_dialect

logger = logging.getLogger(__name__)

FALLBACK_BASE_TYPE = "string"

# Conventional length value for SQL Server's MAX.
MAX_LENGTH_SENTINEL = -1


@dataclass(frozen=True)
class MappedType:
    """Result of mapping one vendor type."""

    base: str
    length: Optional[int] = None
    is_array: bool = False
    format_hint: Optional[str] = None


@dataclass(frozen=True)
class DialectTypeTable:
    """Lookup tables for one dialect."""

    types: Mapping[str, str]
    formats: Mapping[str, str] = field(default_factory=dict)
    preserve_length: frozenset[str] = frozenset()
    underscore_arrays: bool = False


SQLSERVER_TYPES = DialectTypeTable(
    types={
        # Numeric
        "tinyint": "int",
        "smallint": "int",
        "int": "int",
        "bigint": "int",
        "decimal": "decimal",
        "numeric": "decimal",
        "money": "decimal",
        "smallmoney": "decimal",
        "float": "float",
        "real": "float",
        # String
        "char": "char",
        "nchar": "char",
        "varchar": "string",
        "nvarchar": "string",
        "text": "text",
        "ntext": "text",
        # Temporal
        "date": "date",
        "time": "time",
        "datetime": "datetime",
        "datetime2": "datetime",
        "smalldatetime": "datetime",
        "datetimeoffset": "datetime",
        # Other
        "bit": "boolean",
        "uniqueidentifier": "uuid",
        "json": "json",
        "xml": "text",
        "varbinary": "blob",
        "binary": "blob",
        "image": "blob",
        "geography": "string",
        "geometry": "string",
        "hierarchyid": "string",
        "rowversion": "blob",
        "timestamp": "blob",
        "sql_variant": "string",
    },
    formats={
        "datetimeoffset": "tz",
        "xml": "xml",
        "geography": "wkt",
        "geometry": "wkt",
        "hierarchyid": "hierarchyid",
    },
    preserve_length=frozenset({"varchar", "nvarchar", "char", "nchar"}),
)

POSTGRESQL_TYPES = DialectTypeTable(
    types={
        # Numeric
        "smallint": "int",
        "int2": "int",
        "int": "int",
        "integer": "int",
        "int4": "int",
        "bigint": "int",
        "int8": "int",
        "serial": "int",
        "smallserial": "int",
        "bigserial": "int",
        "numeric": "decimal",
        "decimal": "decimal",
        "real": "float",
        "float4": "float",
        "double precision": "float",
        "float8": "float",
        "money": "decimal",
        # String
        "character varying": "string",
        "varchar": "string",
        "character": "char",
        "char": "char",
        "text": "text",
        # Temporal
        "timestamp": "datetime",
        "timestamp without time zone": "datetime",
        "timestamp with time zone": "datetime",
        "timestamptz": "datetime",
        "date": "date",
        "time without time zone": "time",
        "time": "time",
        "time with time zone": "time",
        "timetz": "time",
        "interval": "string",
        # Other
        "boolean": "boolean",
        "bool": "boolean",
        "bytea": "blob",
        "uuid": "uuid",
        "json": "json",
        "jsonb": "json",
        "xml": "text",
        # Full-text search
        "tsvector": "string",
        "tsquery": "string",
        # Network
        "cidr": "string",
        "inet": "string",
        "macaddr": "string",
        "macaddr8": "string",
        # Bit strings
        "bit": "string",
        "bit varying": "string",
        "varbit": "string",
        # Key-value
        "hstore": "json",
        # Geometric
        "point": "string",
        "line": "string",
        "lseg": "string",
        "box": "string",
        "path": "string",
        "polygon": "string",
        "circle": "string",
        # PostGIS
        "geography": "string",
        "geometry": "string",
    },
    formats={
        "timestamp with time zone": "tz",
        "timestamptz": "tz",
        "time with time zone": "tz",
        "timetz": "tz",
        "interval": "interval",
        "xml": "xml",
        "tsvector": "tsvector",
        "tsquery": "tsquery",
        "cidr": "cidr",
        "inet": "cidr",
        "macaddr": "mac",
        "macaddr8": "mac",
        "bit": "bits",
        "bit varying": "bits",
        "varbit": "bits",
        "point": "wkt",
        "line": "wkt",
        "lseg": "wkt",
        "box": "wkt",
        "path": "wkt",
        "polygon": "wkt",
        "circle": "wkt",
        "geography": "wkt",
        "geometry": "wkt",
    },
    preserve_length=frozenset({"character varying", "varchar", "character", "char"}),
    underscore_arrays=True,
)

MYSQL_TYPES = DialectTypeTable(
    types={
        # Numeric
        "tinyint": "int",
        "smallint": "int",
        "mediumint": "int",
        "int": "int",
        "integer": "int",
        "bigint": "int",
        "decimal": "decimal",
        "numeric": "decimal",
        "float": "float",
        "double": "float",
        "double precision": "float",
        "real": "float",
        # String
        "char": "char",
        "varchar": "string",
        "tinytext": "text",
        "text": "text",
        "mediumtext": "text",
        "longtext": "text",
        # Binary
        "binary": "blob",
        "varbinary": "blob",
        "tinyblob": "blob",
        "blob": "blob",
        "mediumblob": "blob",
        "longblob": "blob",
        # Temporal
        "date": "date",
        "time": "time",
        "datetime": "datetime",
        "timestamp": "datetime",
        "year": "int",
        # Other
        "json": "json",
        "bit": "string",
        # Spatial
        "geometry": "string",
        "point": "string",
        "linestring": "string",
        "polygon": "string",
        "multipoint": "string",
        "multilinestring": "string",
        "multipolygon": "string",
        "geometrycollection": "string",
    },
    formats={
        "bit": "bits",
        "geometry": "wkt",
        "point": "wkt",
        "linestring": "wkt",
        "polygon": "wkt",
        "multipoint": "wkt",
        "multilinestring": "wkt",
        "multipolygon": "wkt",
        "geometrycollection": "wkt",
    },
    preserve_length=frozenset({"char", "varchar"}),
)

# Oracle DATE carries a time component, so it maps to datetime.
ORACLE_TYPES = DialectTypeTable(
    types={
        # Numeric
        "number": "number",
        "binary_float": "float",
        "binary_double": "float",
        # String
        "varchar2": "string",
        "nvarchar2": "string",
        "char": "char",
        "nchar": "char",
        "clob": "text",
        "nclob": "text",
        "long": "text",
        # Temporal
        "date": "datetime",
        "timestamp": "datetime",
        "timestamp with time zone": "datetime",
        "timestamp with local time zone": "datetime",
        "interval year to month": "string",
        "interval day to second": "string",
        # Other
        "boolean": "boolean",
        "raw": "blob",
        "long raw": "blob",
        "blob": "blob",
        "bfile": "blob",
        "json": "json",
        "xmltype": "text",
        "rowid": "string",
        "urowid": "string",
        "sdo_geometry": "string",
    },
    formats={
        "timestamp with time zone": "tz",
        "timestamp with local time zone": "tz",
        "interval year to month": "interval",
        "interval day to second": "interval",
        "xmltype": "xml",
        "sdo_geometry": "wkt",
    },
    preserve_length=frozenset({"varchar2", "nvarchar2", "char", "nchar"}),
)

# SQLite uses type affinity; these are the commonly declared names.
SQLITE_TYPES = DialectTypeTable(
    types={
        # INTEGER affinity
        "int": "int",
        "integer": "int",
        "tinyint": "int",
        "smallint": "int",
        "mediumint": "int",
        "bigint": "int",
        "int2": "int",
        "int8": "int",
        # REAL affinity
        "real": "float",
        "double": "float",
        "double precision": "float",
        "float": "float",
        # TEXT affinity
        "text": "text",
        "clob": "text",
        # BLOB affinity
        "blob": "blob",
        # Declared names resolved through affinity
        "varchar": "string",
        "character varying": "string",
        "char": "char",
        "character": "char",
        "nchar": "char",
        "nvarchar": "string",
        "boolean": "boolean",
        "date": "date",
        "datetime": "datetime",
        "timestamp": "datetime",
        "decimal": "decimal",
        "numeric": "decimal",
        "json": "json",
    },
    preserve_length=frozenset(
        {"varchar", "character varying", "char", "character", "nchar", "nvarchar"}
    ),
)

TYPE_TABLES: dict[Dialect, DialectTypeTable] = {
    "sqlserver": SQLSERVER_TYPES,
    "postgresql": POSTGRESQL_TYPES,
    "mysql": MYSQL_TYPES,
    "oracle": ORACLE_TYPES,
    "sqlite": SQLITE_TYPES,
}


# ---------------------------------------------------------------------------
# Exception rules
# ---------------------------------------------------------------------------

ExceptionRule = Callable[[str, str, Optional[int], Optional[int]], Optional[str]]


def _mysql_boolean_flag(dialect: str, name: str, length: int | None, scale: int | None) -> str | None:
    if dialect == "mysql" and name == "tinyint" and length == 1:
        return "boolean"
    return None


def _sqlserver_max_length(dialect: str, name: str, length: int | None, scale: int | None) -> str | None:
    if dialect == "sqlserver" and name in ("varchar", "nvarchar") and length == MAX_LENGTH_SENTINEL:
        return "text"
    return None


def _oracle_number_precision(dialect: str, name: str, length: int | None, scale: int | None) -> str | None:
    if dialect == "oracle" and name == "number" and length is not None:
        if scale is not None and scale > 0:
            return "decimal"
        return "int"
    return None


# Evaluated in order; the first rule returning a base type wins.
EXCEPTION_RULES: tuple[ExceptionRule, ...] = (
    _mysql_boolean_flag,
    _sqlserver_max_length,
    _oracle_number_precision,
)


def map_type(
    dialect: str,
    sql_type: str,
    length: int | None = None,
    scale: int | None = None,
) -> MappedType:
    """Map a vendor SQL type name to a notation base type.

    Args:
        dialect: One of the supported dialects (aliases such as ``postgres``
            or ``mssql`` are accepted).
        sql_type: Vendor type name, e.g. ``NVARCHAR``, ``TEXT[]``, ``_int4``.
        length: Declared length or precision, if any.
        scale: Declared scale, if any.

    Returns:
        The mapped base type with preserved length, array flag and format hint.

    Raises:
        ValueError: If ``dialect`` is not a supported dialect name.
    """
    normalized_dialect = normalize_dialect(dialect)
    table = TYPE_TABLES[normalized_dialect]

    name = (sql_type or "").strip().lower()
    is_array = False
    if name.endswith("[]"):
        is_array = True
        name = name[:-2].rstrip()
    elif table.underscore_arrays and name.startswith("_"):
        is_array = True
        name = name[1:]

    for rule in EXCEPTION_RULES:
        base = rule(normalized_dialect, name, length, scale)
        if base is not None:
            return MappedType(base=base, is_array=is_array)

    base = table.types.get(name)
    if base is None:
        logger.debug("Unknown %s type %r, mapping to %s", normalized_dialect, sql_type, FALLBACK_BASE_TYPE)
        base = FALLBACK_BASE_TYPE

    preserve = length is not None and name in table.preserve_length
    return MappedType(
        base=base,
        length=length if preserve else None,
        is_array=is_array,
        format_hint=table.formats.get(name),
    )
