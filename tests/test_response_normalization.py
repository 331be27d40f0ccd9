# tests/test_response_normalization.py
"""
Tests for normalizing heterogeneous service responses.

Covers rerank orderings, generation answers and the shared field helpers.
"""

import logging
from types import SimpleNamespace

import pytest

from citerag.core.utils import extract_path, get_attr
from citerag.llm.chat import NO_ANSWER, extract_answer_text
from citerag.llm.rerank import ranked_indices, resolve_ranking


class TestRankedIndices:
    def test_plain_ints(self):
        assert ranked_indices([2, 0, 1]) == [2, 0, 1]

    def test_dict_items(self):
        """Items carrying an index field, as rerank APIs return them."""
        assert ranked_indices([{"index": 3, "relevance_score": 0.9}, {"index": 1}]) == [3, 1]

    def test_object_items(self):
        items = [SimpleNamespace(index=1, relevance_score=0.8), SimpleNamespace(index=0)]
        assert ranked_indices(items) == [1, 0]

    def test_response_with_results(self):
        """A whole response object is unwrapped through ``results``."""
        response = SimpleNamespace(results=[SimpleNamespace(index=4)])
        assert ranked_indices(response) == [4]
        assert ranked_indices({"results": [{"index": 2}]}) == [2]

    def test_empty(self):
        assert ranked_indices(None) == []
        assert ranked_indices([]) == []


class TestResolveRanking:
    CANDIDATES = ["a", "b", "c"]

    def test_service_order_preserved(self):
        """Most relevant first, exactly as the service ordered them."""
        assert resolve_ranking([2, 0], self.CANDIDATES) == ["c", "a"]

    def test_fewer_indices_than_requested(self):
        assert resolve_ranking([1], self.CANDIDATES) == ["b"]

    @pytest.mark.parametrize("bad", [3, -1, 99, None, "1", 1.0, True])
    def test_unresolvable_indices_dropped(self, bad, caplog):
        """Out-of-range, negative and non-integer indices are dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger="citerag.llm.rerank"):
            picked = resolve_ranking([bad, 0], self.CANDIDATES)

        assert picked == ["a"]
        assert "Dropped 1" in caplog.text

    def test_duplicates_dropped(self):
        """An index already used is skipped."""
        assert resolve_ranking([1, 1, 0], self.CANDIDATES) == ["b", "a"]

    def test_all_dropped(self):
        assert resolve_ranking([7, 8], self.CANDIDATES) == []


class TestExtractAnswerText:
    def test_flat_text_field(self):
        assert extract_answer_text({"text": "Paris [1]."}) == "Paris [1]."

    def test_message_content_parts(self):
        """Text parts of a structured message are concatenated in order."""
        response = {
            "message": {
                "content": [
                    {"type": "text", "text": "Paris "},
                    {"type": "thinking", "thinking": "..."},
                    {"type": "text", "text": "[1]."},
                ]
            }
        }
        assert extract_answer_text(response) == "Paris [1]."

    def test_sdk_objects(self):
        response = SimpleNamespace(
            text=None,
            message=SimpleNamespace(content=[SimpleNamespace(type="text", text="Berlin [2].")]),
        )
        assert extract_answer_text(response) == "Berlin [2]."

    def test_string_content(self):
        assert extract_answer_text({"message": {"content": "Rome [1]."}}) == "Rome [1]."

    def test_plain_string(self):
        assert extract_answer_text("Madrid [1].") == "Madrid [1]."

    @pytest.mark.parametrize(
        "response",
        [None, {}, {"text": "   "}, {"message": {"content": []}}, {"message": None}, ""],
    )
    def test_defaults_to_no_answer(self, response):
        """Nothing usable falls back to "I don't know."."""
        assert extract_answer_text(response) == NO_ANSWER == "I don't know."


class TestFieldHelpers:
    def test_get_attr_mapping_and_object(self):
        assert get_attr({"a": None, "b": 2}, "a", "b") == 2
        assert get_attr(SimpleNamespace(x=1), "x") == 1
        assert get_attr(None, "x", default="d") == "d"

    def test_extract_path(self):
        data = {"message": {"content": [{"text": "A"}]}}
        assert extract_path(data, "message.content[0].text") == "A"
        assert extract_path(data, "message.content[5].text", default="-") == "-"
        assert extract_path(data, "missing.key") is None
