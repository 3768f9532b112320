"""Log entry model and wire-format conversion."""
