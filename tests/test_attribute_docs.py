"""Tests for attribute docstring extraction."""

from typegraph.attribute_docs import attribute_docs


class Settings:
    """Application settings."""

    timeout: int = 30
    """Seconds before giving up."""

    retries = 3
    """How many attempts.

    @var int
    """

    first, second = 1, 2
    """Tuple targets are not documented attributes."""

    verbose = False

    def reset(self) -> None:
        """Not an attribute."""


def test_attribute_docs_annotated_and_plain() -> None:
    """Verify docs are found below annotated and plain assignments."""
    docs = attribute_docs(Settings)
    assert docs["timeout"] == "Seconds before giving up."
    assert docs["retries"].startswith("How many attempts.")
    assert "@var int" in docs["retries"]


def test_attribute_docs_skips_undocumented() -> None:
    """Verify that attributes without a following string are absent."""
    docs = attribute_docs(Settings)
    assert "verbose" not in docs
    assert "first" not in docs
    assert "second" not in docs
    assert "reset" not in docs


def test_attribute_docs_without_source() -> None:
    """Verify that classes without source yield no docs."""
    assert attribute_docs(int) == {}
