"""Configuration, logging, database boundary and error types."""
