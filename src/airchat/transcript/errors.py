class TranscriptError(ValueError):
    """The transcript text is malformed and cannot be loaded."""
