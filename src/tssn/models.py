"""Canonical schema models produced by the parser and consumed by the generator."""

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from tssn.config.env import get_env_bool, get_env_int

# ---------------------------------------------------------------------------
# Column types
# ---------------------------------------------------------------------------


class SimpleType(BaseModel):
    """A base type with optional length and array marker, e.g. ``string(255)[]``."""

    kind: Literal["simple"] = "simple"
    base: str
    length: Optional[int] = None
    is_array: bool = False

    model_config = {"frozen": True}


class UnionType(BaseModel):
    """A literal union, e.g. ``'pending' | 'shipped'`` or ``-1 | 0 | 1``."""

    kind: Literal["union"] = "union"
    values: Tuple[Union[int, str], ...] = ()

    model_config = {"frozen": True}


ColumnType = Annotated[Union[SimpleType, UnionType], Field(discriminator="kind")]

# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------

ConstraintKind = Literal[
    "PRIMARY_KEY",
    "UNIQUE",
    "INDEX",
    "AUTO_INCREMENT",
    "FOREIGN_KEY",
    "DEFAULT",
    "CHECK",
]


class PrimaryKeyConstraint(BaseModel):
    kind: Literal["PRIMARY_KEY"] = "PRIMARY_KEY"

    model_config = {"frozen": True}


class UniqueConstraint(BaseModel):
    kind: Literal["UNIQUE"] = "UNIQUE"

    model_config = {"frozen": True}


class IndexConstraint(BaseModel):
    kind: Literal["INDEX"] = "INDEX"

    model_config = {"frozen": True}


class AutoIncrementConstraint(BaseModel):
    kind: Literal["AUTO_INCREMENT"] = "AUTO_INCREMENT"

    model_config = {"frozen": True}


class ForeignKeyConstraint(BaseModel):
    """Reference to ``[schema.]Table(column)`` with an optional ``ON ...`` action."""

    kind: Literal["FOREIGN_KEY"] = "FOREIGN_KEY"
    reference_table: str
    reference_column: str
    reference_schema: Optional[str] = None
    reference_action: Optional[str] = None

    model_config = {"frozen": True}


class DefaultConstraint(BaseModel):
    kind: Literal["DEFAULT"] = "DEFAULT"
    value: str

    model_config = {"frozen": True}


class CheckConstraint(BaseModel):
    """``CHECK IN (...)``; the expression is the text between the parentheses."""

    kind: Literal["CHECK"] = "CHECK"
    expression: str

    model_config = {"frozen": True}


Constraint = Annotated[
    Union[
        PrimaryKeyConstraint,
        UniqueConstraint,
        IndexConstraint,
        AutoIncrementConstraint,
        ForeignKeyConstraint,
        DefaultConstraint,
        CheckConstraint,
    ],
    Field(discriminator="kind"),
]


class TableConstraint(BaseModel):
    """Multi-column ``UNIQUE(a, b)`` or ``INDEX(a, b)``."""

    kind: Literal["UNIQUE", "INDEX"]
    columns: Tuple[str, ...] = ()

    model_config = {"frozen": True}


class Annotation(BaseModel):
    """A ``@name: value`` pair taken from comment text."""

    name: str
    value: str

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Schema tree
# ---------------------------------------------------------------------------
# Sequence fields are tuples so a built tree cannot be changed in place.


class Column(BaseModel):
    """A single column definition inside an interface."""

    name: str
    type: ColumnType
    nullable: bool = False
    constraints: Tuple[Constraint, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    comment: Optional[str] = None

    model_config = {"frozen": True}

    def has_constraint(self, kind: str) -> bool:
        """Return True when any constraint of the given kind is attached."""
        return any(c.kind == kind for c in self.constraints)

    @property
    def primary_key(self) -> bool:
        return self.has_constraint("PRIMARY_KEY")


class Table(BaseModel):
    """An interface block describing one relational table.

    Attributes:
        name: Table name, unescaped if it was backtick-quoted.
        columns: Column definitions in declaration order.
        table_constraints: Multi-column UNIQUE/INDEX constraints.
        annotations: Annotations parsed from the preceding comment block.
        metadata: Raw comment lines immediately preceding the interface.
        constraint_comments: Raw in-body comments that are not multi-column
            constraints.
    """

    name: str
    columns: Tuple[Column, ...] = ()
    table_constraints: Tuple[TableConstraint, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    metadata: Tuple[str, ...] = ()
    constraint_comments: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def schema_name(self) -> Optional[str]:
        """Return the value of the ``@schema`` annotation, if present."""
        for annotation in self.annotations:
            if annotation.name == "schema":
                return annotation.value
        return None

    def column(self, name: str) -> Optional[Column]:
        return next((c for c in self.columns if c.name == name), None)


class Schema(BaseModel):
    """Top-level parse result: tables in input order plus free comments."""

    tables: Tuple[Table, ...] = ()
    metadata: Tuple[str, ...] = ()
    annotations: Tuple[Annotation, ...] = ()

    model_config = {"frozen": True}

    def table(self, name: str) -> Optional[Table]:
        return next((t for t in self.tables if t.name == name), None)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class ParseOptions(BaseModel):
    """Switches for the comment-derived views of a parse."""

    skip_constraints: bool = False
    skip_annotations: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "ParseOptions":
        """Build options from ``TSSN_SKIP_*`` environment variables."""
        return cls(
            skip_constraints=bool(get_env_bool("TSSN_SKIP_CONSTRAINTS", False)),
            skip_annotations=bool(get_env_bool("TSSN_SKIP_ANNOTATIONS", False)),
        )


DEFAULT_INDENT = 2
DEFAULT_TYPE_ALIGNMENT = 25
DEFAULT_COMMENT_ALIGNMENT = 45


class GeneratorOptions(BaseModel):
    """Layout options for rendering a schema back to notation text.

    Attributes:
        indent: Spaces before each column line.
        type_alignment: Target column for types when ``align_types`` is set.
        comment_alignment: Target column for trailing ``//`` comments.
        sort_columns: Primary keys first, ``*_at`` timestamps last.
        align_types: Pad ``name:`` so types start at ``type_alignment``.
    """

    indent: int = Field(default=DEFAULT_INDENT, ge=0)
    type_alignment: int = Field(default=DEFAULT_TYPE_ALIGNMENT, ge=0)
    comment_alignment: int = Field(default=DEFAULT_COMMENT_ALIGNMENT, ge=0)
    sort_columns: bool = True
    align_types: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "GeneratorOptions":
        """Build options from ``TSSN_*`` layout environment variables."""
        return cls(
            indent=get_env_int("TSSN_INDENT", DEFAULT_INDENT),
            type_alignment=get_env_int("TSSN_TYPE_ALIGNMENT", DEFAULT_TYPE_ALIGNMENT),
            comment_alignment=get_env_int("TSSN_COMMENT_ALIGNMENT", DEFAULT_COMMENT_ALIGNMENT),
            sort_columns=bool(get_env_bool("TSSN_SORT_COLUMNS", True)),
            align_types=bool(get_env_bool("TSSN_ALIGN_TYPES", False)),
        )
