"""Tests for keyword rules."""

import pytest

from logleak.error import ConfigurationError, InvalidRuleError
from logleak.scanner.keywords import KeywordRule, RuleKind


class TestRuleKind:
    """Test mapping of config type attributes."""

    @pytest.mark.parametrize("value", ["regex", "REGEX", " Regex "])
    def test_regex_attribute(self, value):
        assert RuleKind.from_attribute(value) is RuleKind.PATTERN

    @pytest.mark.parametrize("value", ["text", "literal", "anything"])
    def test_other_attributes_are_literal(self, value):
        assert RuleKind.from_attribute(value) is RuleKind.LITERAL


class TestLiteralRule:
    """Literal rules: whole-token, case-insensitive."""

    @pytest.mark.parametrize("token", ["ssn", "SSN", "Ssn"])
    def test_matches_any_case(self, ssn_rule, token):
        assert ssn_rule.matches(token)

    @pytest.mark.parametrize("token", ["ssnValue", "userSsn", "ss", ""])
    def test_requires_whole_token(self, ssn_rule, token):
        assert not ssn_rule.matches(token)

    def test_none_never_matches(self, ssn_rule):
        assert not ssn_rule.matches(None)
        assert not ssn_rule.contained_in(None)

    def test_literal_content_uses_substring(self, ssn_rule):
        assert ssn_rule.contained_in("User SSN: ")
        assert not ssn_rule.contained_in("User name: ")

    def test_is_not_pattern(self, ssn_rule):
        assert ssn_rule.kind is RuleKind.LITERAL
        assert not ssn_rule.is_pattern


class TestPatternRule:
    """Pattern rules: compiled once, searched."""

    def test_search_not_full_match(self):
        rule = KeywordRule.pattern("card")
        assert rule.matches("creditCardNumber") is False
        assert rule.matches("cardNumber")
        assert rule.matches("mycard")

    def test_identifier_match_is_case_sensitive(self):
        rule = KeywordRule.pattern("^token$")
        assert rule.matches("token")
        assert not rule.matches("TOKEN")

    def test_literal_content_match_ignores_case(self):
        rule = KeywordRule.pattern("token")
        assert rule.contained_in("Auth TOKEN issued")

    def test_invalid_pattern_raises(self):
        with pytest.raises(InvalidRuleError) as exc_info:
            KeywordRule.pattern("[unclosed")

        assert exc_info.value.rule == "[unclosed"
        assert exc_info.value.error_code == "INVALID_RULE"
        assert isinstance(exc_info.value, ConfigurationError)

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_rejected(self, text):
        with pytest.raises(InvalidRuleError):
            KeywordRule.literal(text)


class TestRuleValue:
    """Rules behave as immutable values."""

    def test_equal_rules_compare_equal(self):
        assert KeywordRule.pattern("a+") == KeywordRule.pattern("a+")
        assert KeywordRule.literal("a") != KeywordRule.pattern("a")

    def test_frozen(self, ssn_rule):
        with pytest.raises(AttributeError):
            ssn_rule.text = "password"
