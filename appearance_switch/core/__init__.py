"""Core models, enums, interfaces and configuration."""
