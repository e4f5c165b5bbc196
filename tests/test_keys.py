"""Tests for the index key codec."""

import pytest

from relgraph import config
from relgraph.errors import InvalidIndexError
from relgraph.keys import (
    FIRST_INDEX,
    decode_index,
    encode_index,
    is_index_key,
    member_index,
    relation_id,
)
from relgraph.entry import GraphEntry

RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#_"


class TestKeyFormats:
    """Test key string formats."""

    def test_encode_first_index(self):
        assert encode_index(FIRST_INDEX) == RDF + "1"

    def test_encode_custom_prefix(self):
        assert encode_index(42, prefix="li:") == "li:42"

    def test_is_index_key(self):
        assert is_index_key(RDF + "3")
        assert is_index_key(RDF + "oops")
        assert not is_index_key("http://example.org/name")

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv(config.ENV_INDEX_PREFIX, "seq:")
        assert encode_index(2) == "seq:2"
        assert decode_index("seq:2") == 2


class TestRoundTrip:
    @pytest.mark.parametrize("index", [1, 2, 10, 999, 2**64, 10**40 + 7])
    def test_decode_encode(self, index):
        key = encode_index(index)
        assert key.startswith(RDF)
        assert decode_index(key) == index

    def test_huge_index(self):
        # beyond the default int/str conversion limit
        index = 7 * 10**6000 + 123
        key = encode_index(index)
        assert len(key) == len(RDF) + 6001
        assert key.endswith("123")
        assert decode_index(key) == index

    def test_huge_index_with_zero_chunks(self):
        index = 10**2500
        key = encode_index(index)
        assert key == RDF + "1" + "0" * 2500
        assert decode_index(key) == index

    def test_canonical_round_trip(self):
        for suffix in ("1", "10", "307"):
            assert encode_index(decode_index(RDF + suffix)) == RDF + suffix


class TestDecodeErrors:
    def test_missing_prefix(self):
        with pytest.raises(InvalidIndexError):
            decode_index("http://example.org/_1")

    @pytest.mark.parametrize(
        "suffix",
        ["007", "01", "00", "", "abc", "1.5", "-1", "+1", " 1", "1_0", "٣"],
    )
    def test_not_canonical_decimal(self, suffix):
        with pytest.raises(InvalidIndexError):
            decode_index(RDF + suffix)

    def test_below_first_index(self):
        with pytest.raises(InvalidIndexError) as exc:
            decode_index(RDF + "0")
        assert exc.value.key == RDF + "0"

    def test_invalid_index_is_value_error(self):
        with pytest.raises(ValueError):
            decode_index(RDF + "0")


class TestEncodeErrors:
    @pytest.mark.parametrize("index", [0, -1, -(10**30)])
    def test_out_of_range(self, index):
        with pytest.raises(ValueError):
            encode_index(index)

    def test_out_of_range_is_not_invalid_key(self):
        with pytest.raises(ValueError) as exc:
            encode_index(0)
        assert not isinstance(exc.value, InvalidIndexError)


class TestRelationId:
    def test_string(self):
        assert relation_id("knows") == "knows"

    def test_named_entry(self):
        assert relation_id(GraphEntry("knows")) == "knows"

    def test_anonymous_entry(self):
        with pytest.raises(ValueError):
            relation_id(GraphEntry())


class TestMemberIndex:
    def test_member_key(self):
        assert member_index(RDF + "12") == 12

    def test_other_relation(self):
        assert member_index("http://example.org/name") is None

    def test_zero_is_not_a_member(self):
        assert member_index(RDF + "0") is None

    @pytest.mark.parametrize("suffix", ["007", "x", ""])
    def test_malformed_suffix(self, suffix):
        with pytest.raises(InvalidIndexError):
            member_index(RDF + suffix)
