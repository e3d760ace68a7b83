"""Unit tests for process_line and the RuleSet it consumes."""

import unittest

from ldx.line_processor import process_line
from ldx.rules import Rule, RuleSet

LOGGER_NAME = "ldx.line_processor"


class TestLiteralRules(unittest.TestCase):
    """Test static string replacements."""

    def test_static_string_match(self):
        """A matching literal replaces the whole line."""
        with self.assertNoLogs(LOGGER_NAME, level="WARNING"):
            result = process_line("Test match 1", {"Test match 1": "✅ Test match 1 processed"})
        self.assertEqual(result, "✅ Test match 1 processed")

    def test_substring_match_ignores_rest_of_line(self):
        """The pattern may appear anywhere in the line."""
        rules = {"error": "something broke"}
        self.assertEqual(process_line("[12:00] an error occurred here", rules), "something broke")

    def test_match_is_not_regex(self):
        """Patterns are matched literally, not as regular expressions."""
        rules = {"a.c": "dotted"}
        self.assertIsNone(process_line("abc", rules))
        self.assertEqual(process_line("xa.cx", rules), "dotted")

    def test_empty_literal_suppresses(self):
        """An empty replacement matches but yields nothing to print."""
        self.assertEqual(process_line("DEBUG noise", {"DEBUG": ""}), "")


class TestRuleOrder(unittest.TestCase):
    """Test first-match-wins ordering."""

    def test_first_matching_rule_wins(self):
        """When several patterns match, the earliest rule is used."""
        rules = {"build": "first", "build done": "second"}
        self.assertEqual(process_line("build done", rules), "first")

    def test_order_follows_pairs(self):
        """Ordered pairs control precedence the same way as a mapping."""
        rules = [("build done", "specific"), ("build", "general")]
        self.assertEqual(process_line("build done", rules), "specific")
        self.assertEqual(process_line("build started", rules), "general")


class TestTransformRules(unittest.TestCase):
    """Test callable actions."""

    def test_function_value(self):
        """A callable receives the full line and its result is returned."""
        line = "Function match test line"
        with self.assertNoLogs(LOGGER_NAME, level="WARNING"):
            result = process_line(line, {"Function match": lambda text: f"Processed: {text}"})
        self.assertEqual(result, f"Processed: {line}")

    def test_function_error_is_logged_once(self):
        """A raising callable drops the line and logs one warning with its message."""
        calls = []

        def broken(line):
            calls.append(line)
            raise RuntimeError("Test error")

        with self.assertLogs(LOGGER_NAME, level="WARNING") as logs:
            result = process_line("Error match", {"Error match": broken})

        self.assertIsNone(result)
        self.assertEqual(calls, ["Error match"])
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].getMessage(), "LDX: provided function errored: Test error")

    def test_non_string_result_is_converted(self):
        """Non-string return values are converted with str()."""
        self.assertEqual(process_line("count", {"count": lambda line: 42}), "42")

    def test_none_result_drops_line(self):
        """A callable returning None drops the line without a warning."""
        with self.assertNoLogs(LOGGER_NAME, level="WARNING"):
            self.assertIsNone(process_line("skip me", {"skip": lambda line: None}))


class TestNoMatchAndInvalid(unittest.TestCase):
    """Test lines without a match and malformed rules."""

    def test_no_match(self):
        """A line containing no pattern yields None and logs nothing."""
        with self.assertNoLogs(LOGGER_NAME, level="WARNING"):
            result = process_line("Some random line", {"Something": "not used"})
        self.assertIsNone(result)

    def test_empty_rules(self):
        """No rules means every line is dropped."""
        self.assertIsNone(process_line("anything", {}))

    def test_invalid_configuration_type(self):
        """A non-string, non-callable action is reported with its key."""
        with self.assertLogs(LOGGER_NAME, level="WARNING") as logs:
            result = process_line("Invalid match", {"Invalid match": 12345})

        self.assertIsNone(result)
        self.assertEqual(
            [record.getMessage() for record in logs.records],
            ["Invalid configuration for key: Invalid match. Expected string or function."],
        )

    def test_invalid_rule_does_not_affect_other_lines(self):
        """Only lines hitting the malformed rule are affected."""
        rules = {"bad": None, "good": "ok"}
        with self.assertLogs(LOGGER_NAME, level="WARNING"):
            self.assertIsNone(process_line("bad line", rules))
        self.assertEqual(process_line("good line", rules), "ok")


class TestRuleSet(unittest.TestCase):
    """Test RuleSet construction."""

    def test_preserves_insertion_order(self):
        """Patterns keep the order they were supplied in."""
        rules = RuleSet.from_mapping({"b": "1", "a": "2", "c": "3"})
        self.assertEqual(rules.patterns, ["b", "a", "c"])

    def test_duplicate_patterns_rejected(self):
        """Pairs with a repeated pattern are ambiguous and rejected."""
        with self.assertRaises(ValueError):
            RuleSet.from_pairs([("x", "1"), ("x", "2")])

    def test_non_string_pattern_rejected(self):
        """Patterns must be strings."""
        with self.assertRaises(TypeError):
            RuleSet([Rule(1, "one")])  # type: ignore[arg-type]

    def test_malformed_pairs_rejected(self):
        """Items that are not pairs are rejected."""
        with self.assertRaises(TypeError):
            RuleSet.coerce([("only-pattern",)])
        with self.assertRaises(TypeError):
            RuleSet.coerce("not rules")

    def test_coerce_returns_same_ruleset(self):
        """Coercing a RuleSet is a no-op."""
        rules = RuleSet.from_mapping({"x": "y"})
        self.assertIs(RuleSet.coerce(rules), rules)

    def test_first_match(self):
        """first_match returns the matching Rule object."""
        rules = RuleSet.from_pairs([("foo", "1"), ("bar", "2")])
        self.assertEqual(rules.first_match("a bar b"), Rule("bar", "2"))
        self.assertIsNone(rules.first_match("baz"))


if __name__ == "__main__":
    unittest.main()
