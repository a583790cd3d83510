"""Verify package imports work correctly."""


def test_import_mathflow() -> None:
    """Test that mathflow can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import mathflow

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert mathflow.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from mathflow import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    import mathflow

    for name in mathflow.__all__:
        assert getattr(mathflow, name) is not None
