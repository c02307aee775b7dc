def to_int(value: int | float | None, default: int = 0) -> int:
    """Convert Optional[int] to int safely."""
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
