"""Placeholder test verifying package import."""


def test_import() -> None:
    """Verify top-level package is importable."""
    import correspondence_diff

    assert correspondence_diff.__version__ is not None
    assert correspondence_diff.__version__ == "0.1.0"
