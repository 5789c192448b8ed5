"""Tests for the basename <-> constant name convention."""

import pytest

from constref.inflector import Inflector


class TestCamelize:
    """Tests for basename -> constant name."""

    @pytest.mark.parametrize(
        "basename, expected",
        [
            ("order", "Order"),
            ("users_controller", "UsersController"),
            ("line_item", "LineItem"),
            ("v2_api", "V2Api"),
            ("oauth2", "Oauth2"),
        ],
    )
    def test_default_convention(self, basename, expected):
        assert Inflector().camelize(basename) == expected

    def test_words_are_capitalized_not_preserved(self):
        # Same as Ruby's String#capitalize
        assert Inflector().camelize("fooBar") == "Foobar"

    def test_underscore_runs_collapse(self):
        inflector = Inflector()
        assert inflector.camelize("line__item") == "LineItem"
        assert inflector.camelize("_private") == "Private"
        assert inflector.camelize("trailing_") == "Trailing"

    def test_acronyms(self):
        inflector = Inflector(acronyms=["HTML", "API"])
        assert inflector.camelize("html_parser") == "HTMLParser"
        assert inflector.camelize("api") == "API"
        assert inflector.camelize("public_api_client") == "PublicAPIClient"

    def test_acronym_only_matches_whole_words(self):
        inflector = Inflector(acronyms=["API"])
        assert inflector.camelize("apiary") == "Apiary"

    def test_override_wins(self):
        inflector = Inflector(acronyms=["OAUTH"], overrides={"oauth": "OAuth"})
        assert inflector.camelize("oauth") == "OAuth"
        assert inflector.camelize("oauth_token") == "OAUTHToken"


class TestUnderscore:
    """Tests for constant name -> basename."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Order", "order"),
            ("UsersController", "users_controller"),
            ("V2Api", "v2_api"),
            ("HTMLParser", "html_parser"),
        ],
    )
    def test_default_convention(self, name, expected):
        assert Inflector().underscore(name) == expected

    def test_acronyms(self):
        inflector = Inflector(acronyms=["HTML", "API"])
        assert inflector.underscore("HTMLParser") == "html_parser"
        assert inflector.underscore("MyHTMLParser") == "my_html_parser"
        assert inflector.underscore("PublicAPIClient") == "public_api_client"

    def test_override(self):
        inflector = Inflector(overrides={"oauth": "OAuth"})
        assert inflector.underscore("OAuth") == "oauth"

    @pytest.mark.parametrize(
        "basename",
        ["order", "line_item", "users_controller", "v2_api", "html_parser", "my_api_client"],
    )
    def test_canonical_names_round_trip(self, basename):
        inflector = Inflector(acronyms=["HTML", "API"])
        assert inflector.underscore(inflector.camelize(basename)) == basename

    def test_collapsed_underscores_do_not_round_trip(self):
        inflector = Inflector()
        assert inflector.underscore(inflector.camelize("line__item")) == "line_item"
