"""Signal Hunt: a reaction-time target game over a falling-glyph field."""
