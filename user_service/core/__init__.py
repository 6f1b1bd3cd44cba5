"""Core Layer — error types shared by every other layer; no IO."""
