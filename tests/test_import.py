"""Verify package imports work correctly."""


def test_import_spanned() -> None:
    """Test that spanned can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import spanned

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert spanned.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from spanned import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    """Every name in __all__ is importable from the package root."""
    import spanned

    for name in spanned.__all__:
        assert hasattr(spanned, name), name
