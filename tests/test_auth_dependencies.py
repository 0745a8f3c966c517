"""Unit tests for bearer token extraction."""

import pytest

from common.auth.dependencies import create_token_dependency, extract_bearer_token


class TestExtractBearerToken:
    @pytest.mark.parametrize("header, expected", [
        ("Bearer abc.def", "abc.def"),
        ("bearer abc.def", "abc.def"),
        ("  Bearer   abc.def  ", "abc.def"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer ", None),
        ("Bearer", None),
        ("", None),
        (None, None),
    ])
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected

    @pytest.mark.asyncio
    async def test_dependency_returns_token(self):
        get_token = create_token_dependency()

        assert await get_token(authorization="Bearer xyz") == "xyz"
        assert await get_token(authorization=None) is None
