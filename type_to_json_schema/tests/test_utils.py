#!/usr/bin/env python3

import pytest

from type_to_json_schema.utils import snake_to_camel_case


class TestSnakeToCamelCase:
    """Test cases for property name conversion"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("first_name", "firstName"),
            ("FIRST_NAME", "firstName"),
            ("first 3 rows", "first3Rows"),
            ("_cache_key", "_cacheKey"),
            ("id", "id"),
            ("alreadyCamel", "alreadyCamel"),
            ("kebab-case-name", "kebabCaseName"),
            ("", ""),
            ("__", "__"),
        ],
    )
    def test_conversion(self, text, expected):
        assert snake_to_camel_case(text) == expected


if __name__ == "__main__":
    pytest.main([__file__])
