"""
Unit Tests for extracting JSON from model output
"""
import pytest

from app.core.exceptions import AIResponseParseError, AIServiceError
from app.utils.response_parser import JSONResponseParser


class TestExtractJsonBlock:

    def test_json_fence(self):
        text = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
        assert JSONResponseParser.extract_json_block(text) == '{"a": 1}'

    def test_plain_fence(self):
        text = '```\n{"a": 1}\n```'
        assert JSONResponseParser.extract_json_block(text) == '{"a": 1}'

    def test_outermost_braces(self):
        text = 'Sure! {"a": {"b": 2}} Hope this helps.'
        assert JSONResponseParser.extract_json_block(text) == '{"a": {"b": 2}}'

    def test_raw_text(self):
        assert JSONResponseParser.extract_json_block('  [1, 2]  ') == '[1, 2]'


class TestParseObject:

    def test_parses_fenced_object(self):
        result = JSONResponseParser.parse_object('```json\n{"executiveSummary": "Hi"}\n```')
        assert result == {"executiveSummary": "Hi"}

    def test_empty_response(self):
        with pytest.raises(AIResponseParseError):
            JSONResponseParser.parse_object("   ")

    def test_invalid_json(self):
        with pytest.raises(AIResponseParseError):
            JSONResponseParser.parse_object('{"executiveSummary": }')

    def test_non_object(self):
        with pytest.raises(AIResponseParseError):
            JSONResponseParser.parse_object('["a", "b"]')

    def test_parse_error_is_ai_service_error(self):
        """Callers fall back on any AIServiceError, parse failures included"""
        with pytest.raises(AIServiceError):
            JSONResponseParser.parse_object("no json here")
