"""Personal task-tracking assistant with a plain-text save file."""
