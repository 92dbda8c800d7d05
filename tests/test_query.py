"""
Tests for the '%20' query encoding used by the snapshot endpoint.
"""

import pytest

from sweagle_step.infrastructure.query import quote_service, service_query


class TestQuoteService:
    """Tests for encoding single values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("a b", "a%20b"),
            ("x+y", "x%2By"),
            ("a + b", "a%20%2B%20b"),
            ("release/1.0", "release%2F1.0"),
            ("déploiement", "d%C3%A9ploiement"),
            ("", ""),
        ],
    )
    def test_encodes_value(self, value, expected):
        assert quote_service(value) == expected


class TestServiceQuery:
    """Tests for joining encoded parameters."""

    def test_keeps_parameter_order(self):
        query = service_query(
            {"name": "prod", "level": "none", "description": "first cut", "tag": ""}
        )

        assert query == "name=prod&level=none&description=first%20cut&tag="
