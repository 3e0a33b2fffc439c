import json
import sys

import pytest

from courtside.services.normalizer import (
    ExtractionError,
    NoStructureFound,
    UnrecoverableSyntax,
    extract_structure,
)


class TestStrictInput:
    @pytest.mark.parametrize("payload", [
        {"marketContext": {"spread": "LAL -4.5"}, "props": []},
        [{"id": "a", "homeTeam": "Lakers"}, {"id": "b"}],
        {"nested": {"list": [1, 2, {"deep": "value"}]}},
        [],
    ])
    def test_valid_json_round_trips(self, payload):
        assert extract_structure(json.dumps(payload)) == payload

    def test_surrounding_whitespace_is_ignored(self):
        assert extract_structure('\n\n  {"a": 1}  \n') == {"a": 1}

    def test_strict_input_never_reaches_repair(self, caplog):
        with caplog.at_level("DEBUG", logger="courtside.services.normalizer"):
            extract_structure('{"a": 1}')
        assert "repair" not in caplog.text


class TestFencesAndProse:
    def test_json_fence(self):
        raw = '```json\n{"props": [{"player": "X"}]}\n```'
        assert extract_structure(raw) == {"props": [{"player": "X"}]}

    def test_untagged_fence(self):
        assert extract_structure("```\n[1, 2, 3]\n```") == [1, 2, 3]

    def test_fence_tag_is_case_insensitive(self):
        assert extract_structure('```JSON\n{"a": true}\n```') == {"a": True}

    def test_fence_with_explanatory_prose(self):
        raw = 'Here is the analysis you asked for:\n```json\n{"a": 1}\n```\nGood luck!'
        assert extract_structure(raw) == {"a": 1}

    def test_prose_without_fence(self):
        raw = 'Sure! {"a": 1} Let me know if you need more.'
        assert extract_structure(raw) == {"a": 1}

    def test_first_delimiter_decides_array(self):
        raw = 'Games: [{"id": "x"}] enjoy'
        assert extract_structure(raw) == [{"id": "x"}]

    def test_first_delimiter_decides_object(self):
        raw = 'Result {"values": [1, 2]} done'
        assert extract_structure(raw) == {"values": [1, 2]}

    def test_trailing_prose_with_stray_brace(self):
        raw = '{"a": 1}\nNote: odds move fast }'
        assert extract_structure(raw) == {"a": 1}

    def test_braces_inside_strings_are_ignored(self):
        raw = '{"summary": "Sharp money {heavy} on LAL]"} trailing }'
        assert extract_structure(raw) == {"summary": "Sharp money {heavy} on LAL]"}

    def test_escaped_quotes_inside_strings(self):
        raw = r'{"note": "he said \"}\" twice"} bye'
        assert extract_structure(raw) == {"note": 'he said "}" twice'}


class TestRepairs:
    def test_trailing_comma_in_object(self):
        assert extract_structure('{"a": 1, "b": 2,}') == {"a": 1, "b": 2}

    def test_trailing_comma_in_array(self):
        assert extract_structure('{"values": [1, 2, 3, ]}') == {"values": [1, 2, 3]}

    def test_multiple_trailing_commas(self):
        raw = '{"props":[{"player":"Y",}],}'
        assert extract_structure(raw) == {"props": [{"player": "Y"}]}

    def test_missing_value_becomes_null(self):
        raw = '{"player": "X", "team":, "stat": "Points"}'
        assert extract_structure(raw) == {"player": "X", "team": None, "stat": "Points"}

    def test_missing_last5_values_becomes_empty_array(self):
        raw = '{"player": "X", "last5Values":, "confidence": 7}'
        assert extract_structure(raw) == {"player": "X", "last5Values": [], "confidence": 7}

    def test_missing_last5_values_with_whitespace(self):
        raw = '{"last5Values"  :   , "a": 1}'
        assert extract_structure(raw) == {"last5Values": [], "a": 1}

    def test_repairs_combine(self):
        raw = '```json\n{"props": [{"last5Values":, "team":, "line": 24.5,},],}\n```'
        assert extract_structure(raw) == {
            "props": [{"last5Values": [], "team": None, "line": 24.5}],
        }

    def test_unbalanced_text_falls_back_to_last_closer(self):
        # The string never closes, so the scan cannot find depth zero.
        raw = '{"a": "unterminated}'
        with pytest.raises(UnrecoverableSyntax):
            extract_structure(raw)


class TestFailures:
    @pytest.mark.parametrize("raw", [
        "",
        "   ",
        "No games found today.",
        "The spread is LAL -4.5 and the total is 228.5",
    ])
    def test_no_delimiters(self, raw):
        with pytest.raises(NoStructureFound):
            extract_structure(raw)

    def test_opener_without_closer(self):
        with pytest.raises(NoStructureFound):
            extract_structure('{"a": 1')

    def test_closer_before_opener(self):
        with pytest.raises(NoStructureFound):
            extract_structure("} and then {")

    def test_none_input(self):
        with pytest.raises(NoStructureFound):
            extract_structure(None)

    def test_unrecoverable_syntax_carries_cleaned_text(self):
        raw = "```json\n{player: X, confidence: high}\n```"
        with pytest.raises(UnrecoverableSyntax) as exc_info:
            extract_structure(raw)
        assert exc_info.value.cleaned_text == "{player: X, confidence: high}"

    def test_unrecoverable_syntax_is_logged(self, caplog):
        with caplog.at_level("ERROR", logger="courtside.services.normalizer"):
            with pytest.raises(UnrecoverableSyntax):
                extract_structure("{'single': 'quotes'}")
        assert "{'single': 'quotes'}" in caplog.text

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
    def test_int_past_digit_limit_is_unrecoverable(self):
        raw = '{"a": ' + "9" * 5000 + "}"
        with pytest.raises(UnrecoverableSyntax) as exc_info:
            extract_structure(raw)
        assert exc_info.value.cleaned_text == raw

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
    def test_int_past_digit_limit_after_repair(self):
        with pytest.raises(UnrecoverableSyntax):
            extract_structure('{"a": ' + "9" * 5000 + ",}")

    def test_errors_share_a_base(self):
        assert issubclass(NoStructureFound, ExtractionError)
        assert issubclass(UnrecoverableSyntax, ExtractionError)
        assert issubclass(ExtractionError, ValueError)
