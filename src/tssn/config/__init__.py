"""Environment-driven configuration for parsing, generation and type mapping."""
