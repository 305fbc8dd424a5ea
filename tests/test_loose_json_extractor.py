import json

import pytest

from mindmate.domain.entities.agent_response import EXTRACTION_FALLBACK, AgentResponse, ExtractionResult
from mindmate.infrastructure.parsing.loose_json import LooseJsonExtractor, _repair, extract


WELL_FORMED = json.dumps(
    {
        "response": {
            "message": "That sounds hard.",
            "tone": "supportive",
            "focus_area": "anxiety",
            "conversation_type": "active_listening",
        },
        "metadata": {
            "response_type": "therapeutic",
            "safety_level": "appropriate",
            "engagement_style": "supportive",
        },
    }
)


class TestStrictInput:
    def test_well_formed_object(self):
        result = extract(WELL_FORMED)
        assert result.ok
        assert result.response.message == "That sounds hard."
        assert result.response.tone == "supportive"
        assert result.response.focus_area == "anxiety"
        assert result.response.safety_level == "appropriate"

    def test_minimal_object_leaves_tags_absent(self):
        result = extract('{"response": {"message": "Hi there"}}')
        assert result.ok
        assert result.response.message == "Hi there"
        assert result.response.tone is None
        assert result.response.engagement_style is None

    def test_raw_tree_is_kept_for_diagnostics(self):
        result = extract(WELL_FORMED)
        assert result.response.raw == json.loads(WELL_FORMED)


class TestFencedInput:
    def test_fenced_equals_unwrapped(self):
        fenced = f"```json\n{WELL_FORMED}\n```"
        assert extract(fenced) == extract(WELL_FORMED)

    def test_fence_surrounded_by_prose(self):
        text = (
            "Here is my reply:\n"
            "```json\n"
            '{"response": {"message": "I hear you."}}\n'
            "```\n"
            "Let me know if you need anything else."
        )
        result = extract(text)
        assert result.ok
        assert result.response.message == "I hear you."

    def test_fence_tag_is_case_insensitive(self):
        result = extract('```JSON\n{"response": {"message": "ok"}}\n```')
        assert result.ok
        assert result.response.message == "ok"

    def test_first_fenced_block_wins(self):
        text = (
            '```json\n{"response": {"message": "first"}}\n```\n'
            '```json\n{"response": {"message": "second"}}\n```'
        )
        assert extract(text).response.message == "first"

    def test_malformed_inside_fence_is_repaired(self):
        text = "```json\n{'response': {'message': 'Breathe slowly.',},}\n```"
        result = extract(text)
        assert result.ok
        assert result.response.message == "Breathe slowly."


class TestLenientRepair:
    @pytest.mark.parametrize(
        "text",
        [
            # Trailing commas
            '{"response": {"message": "Take a breath.", "tone": "calm",},}',
            # Single-quoted strings
            "{'response': {'message': 'Take a breath.'}}",
            # Unquoted keys
            '{response: {message: "Take a breath.", tone: "calm"}}',
            # Prose before and after the object
            'Sure! {"response": {"message": "Take a breath."}} Hope that helps.',
            # Python literals
            '{"response": {"message": "Take a breath.", "urgent": False, "extra": None}}',
            # Truncated tail
            '{"response": {"message": "Take a breath.", "tone": "cal',
            # Braces in the prose around the object
            'I think {this} matters. {"response": {"message": "Take a breath."}}',
            '{"response": {"message": "Take a breath."}} (see {note})',
            # Two objects back to back, only the second has the right shape
            '{"note": "first"} {"response": {"message": "Take a breath."}}',
            # Apostrophe in prose inside braces
            "{this isn't json} {'response': {'message': 'Take a breath.'}}",
        ],
    )
    def test_recoverable_defects(self, text):
        result = extract(text)
        assert result.ok, result.reason
        assert result.response.message == "Take a breath."

    def test_apostrophe_inside_double_quotes_survives(self):
        result = extract('{response: {message: "It\'s okay to feel this way",}}')
        assert result.ok
        assert result.response.message == "It's okay to feel this way"

    def test_double_quote_inside_single_quotes_is_escaped(self):
        result = extract("{'response': {'message': 'You said \"enough\" today'}}")
        assert result.ok
        assert result.response.message == 'You said "enough" today'

    def test_raw_newline_inside_string(self):
        result = extract('{"response": {"message": "line one\nline two"}}')
        assert result.ok
        assert result.response.message == "line one\nline two"

    def test_braces_inside_strings_do_not_end_the_object(self):
        result = extract('Note: {"response": {"message": "Use {curly} braces } freely"}} done')
        assert result.ok, result.reason
        assert result.response.message == "Use {curly} braces } freely"

    def test_repair_closes_in_nesting_order(self):
        repaired = _repair('{"a": [1, {"b": 2')
        assert json.loads(repaired) == {"a": [1, {"b": 2}]}


class TestFailures:
    @pytest.mark.parametrize(
        "text",
        [
            "Sure! I think your message is great.",
            "",
            "   ",
            "[1, 2, 3]",
            '"just a string"',
            '{"message": "no response wrapper"}',
            '{"response": "not an object"}',
            '{"response": {"tone": "supportive"}}',
            '{"response": {"message": ""}}',
            '{"response": {"message": "   "}}',
            '{"response": {"message": 42}}',
            "{{{{",
            "}",
        ],
    )
    def test_failure_marker(self, text):
        result = extract(text)
        assert isinstance(result, ExtractionResult)
        assert result.ok is False
        assert result.response is None
        assert result.reason

    @pytest.mark.parametrize("value", [None, 12, b'{"response": {"message": "x"}}'])
    def test_non_text_input_never_raises(self, value):
        result = extract(value)
        assert result.ok is False

    def test_deeply_nested_input_never_raises(self):
        result = extract("[" * 100000)
        assert result.ok is False


def test_extractor_class_delegates():
    result = LooseJsonExtractor().extract('{"response": {"message": "ok"}}')
    assert result.ok
    assert isinstance(result.response, AgentResponse)


class TestAgentResponseDict:
    def test_round_trip_of_parsed_response(self):
        response = extract(WELL_FORMED).response
        assert response.to_dict() == json.loads(WELL_FORMED)
        assert AgentResponse.from_dict(response.to_dict()) == response

    def test_round_trip_of_extraction_fallback(self):
        data = EXTRACTION_FALLBACK.to_dict()
        assert data["response"]["message"] == EXTRACTION_FALLBACK.message
        assert AgentResponse.from_dict(data) == EXTRACTION_FALLBACK

    def test_absent_tags_are_omitted(self):
        data = extract('{"response": {"message": "Hi there"}}').response.to_dict()
        assert data == {"response": {"message": "Hi there"}, "metadata": {}}
