"""Verify package imports work correctly."""


def test_import_docmark() -> None:
    """Test that docmark can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import docmark

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert docmark.__version__ == expected


def test_version_format() -> None:
    from docmark import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    import docmark

    for name in docmark.__all__:
        assert hasattr(docmark, name), name


def test_subpackages_import() -> None:
    from docmark.lexer import LineSource
    from docmark.parsing import BlockParsingMixin, ContainerStack, InlineParser, substitute
    from docmark.renderers import DocumentRenderer, HtmlRenderer
    from docmark.utils import get_logger

    assert LineSource and BlockParsingMixin and ContainerStack and InlineParser
    assert substitute and DocumentRenderer and HtmlRenderer
    assert get_logger("x").name == "docmark.x"
