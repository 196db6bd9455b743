"""Unit tests for path helpers."""

import pytest

from token_studio.models import CaseStyle
from token_studio.paths import (
    apply_case_style,
    build_full_path,
    parse_full_path,
    style_path,
)


class TestFullPath:
    """Tests for building and parsing full paths."""

    def test_build_full_path(self):
        """Test joining segments and name."""
        assert build_full_path(["colors", "brand"], "brand-500") == "colors/brand/brand-500"

    def test_build_without_path(self):
        """Test a bare name is its own full path."""
        assert build_full_path([], "primary") == "primary"

    def test_parse_full_path(self):
        """Test the last segment becomes the name."""
        assert parse_full_path("colors/brand/brand-500") == (["colors", "brand"], "brand-500")

    @pytest.mark.parametrize("separator", ["/", ".", "-"])
    @pytest.mark.parametrize(
        "path,name",
        [
            (["colors", "brand"], "500"),
            ([], "solo"),
            (["a", "b", "c", "d"], "leaf"),
        ],
    )
    def test_round_trip(self, separator, path, name):
        """Test parse(build(path, name)) == (path, name) for every separator."""
        full_path = build_full_path(path, name, separator)

        assert parse_full_path(full_path, separator) == (path, name)


class TestCaseStyle:
    """Tests for segment re-casing."""

    def test_kebab(self):
        """Test kebab-case output."""
        assert apply_case_style("primaryHover", CaseStyle.KEBAB) == "primary-hover"
        assert apply_case_style("brand-500", "kebab") == "brand-500"

    def test_snake(self):
        """Test snake_case output."""
        assert apply_case_style("primary-hover", CaseStyle.SNAKE) == "primary_hover"

    def test_camel(self):
        """Test camelCase output."""
        assert apply_case_style("primary-hover", CaseStyle.CAMEL) == "primaryHover"
        assert apply_case_style("font size", CaseStyle.CAMEL) == "fontSize"

    def test_pascal(self):
        """Test PascalCase output."""
        assert apply_case_style("primary_hover", CaseStyle.PASCAL) == "PrimaryHover"

    def test_style_path(self):
        """Test every segment is re-cased."""
        assert style_path(["textColors", "brand-500"], CaseStyle.SNAKE) == [
            "text_colors",
            "brand_500",
        ]
