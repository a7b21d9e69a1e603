"""Character persistence: async SQLAlchemy engine and snapshot store."""
