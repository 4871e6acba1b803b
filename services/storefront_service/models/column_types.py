"""Column types that map to Postgres natives and still run on SQLite in tests."""

from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import ARRAY

# Supabase stores tags, sizes, colors and image URLs as text[]
StringList = JSON().with_variant(ARRAY(String), "postgresql")
