"""Services: schedule logic, settings persistence, appearance backends and events."""
