"""Tests for the stable hash and the identifier bridge."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from moviestream.providers.identifiers import (
    CAST_ID_MODULUS,
    IdentifierBridge,
    cast_member_id,
    stable_hash,
)

imdb_ids = st.integers(min_value=1, max_value=99_999_999).map(lambda n: f"tt{n:07d}")


# -------------------------------------------------------------------------
# Stable Hash
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestStableHash:
    @staticmethod
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", 0),
            ("a", 97),
            ("ab", 3105),
            ("hello", 99162322),
            # Signed overflow lands exactly on -2**31
            ("polygenelubricants", 2**31),
        ],
    )
    def test_known_values(text: str, expected: int) -> None:
        assert stable_hash(text) == expected

    @staticmethod
    def test_hashes_utf16_code_units() -> None:
        # U+1F600 is the surrogate pair D83D DE00
        assert stable_hash("\U0001f600") == 0xD83D * 31 + 0xDE00

    @staticmethod
    @given(st.text())
    def test_non_negative_and_bounded(text: str) -> None:
        assert 0 <= stable_hash(text) <= 2**31

    @staticmethod
    @given(st.text())
    def test_deterministic(text: str) -> None:
        assert stable_hash(text) == stable_hash(text)


@pytest.mark.unit
class TestCastMemberId:
    @staticmethod
    def test_ignores_case_and_padding() -> None:
        assert cast_member_id("  Keanu Reeves ") == cast_member_id("keanu reeves")

    @staticmethod
    @given(st.text(min_size=1))
    def test_within_modulus(name: str) -> None:
        assert 0 <= cast_member_id(name) < CAST_ID_MODULUS


# -------------------------------------------------------------------------
# Identifier Bridge
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestIdentifierBridge:
    @staticmethod
    def test_round_trip(bridge: IdentifierBridge) -> None:
        numeric_id = bridge.generate_numeric_id("tt0133093")

        assert numeric_id == stable_hash("tt0133093")
        assert bridge.get_native_id(numeric_id) == "tt0133093"
        assert numeric_id in bridge

    @staticmethod
    def test_unknown_id_returns_none(bridge: IdentifierBridge) -> None:
        assert bridge.get_native_id(42) is None
        assert 42 not in bridge

    @staticmethod
    def test_registration_is_idempotent(bridge: IdentifierBridge) -> None:
        first = bridge.generate_numeric_id("tt0234215")
        second = bridge.generate_numeric_id("tt0234215")

        assert first == second
        assert bridge.size() == 1
        assert len(bridge) == 1

    @staticmethod
    def test_clear_forgets_mappings(bridge: IdentifierBridge) -> None:
        numeric_id = bridge.generate_numeric_id("tt0133093")
        bridge.generate_numeric_id("tt0234215")

        bridge.clear()

        assert bridge.size() == 0
        assert bridge.get_native_id(numeric_id) is None

    @staticmethod
    def test_instances_are_independent() -> None:
        first, second = IdentifierBridge(), IdentifierBridge()
        numeric_id = first.generate_numeric_id("tt0133093")

        assert second.get_native_id(numeric_id) is None

    @staticmethod
    def test_collision_keeps_latest(bridge: IdentifierBridge) -> None:
        # "Aa" and "BB" share a hash in 31-based polynomial hashing
        assert stable_hash("Aa") == stable_hash("BB")

        bridge.generate_numeric_id("Aa")
        numeric_id = bridge.generate_numeric_id("BB")

        assert bridge.get_native_id(numeric_id) == "BB"
        assert bridge.size() == 1

    @staticmethod
    @given(st.lists(imdb_ids, max_size=50))
    def test_every_generated_id_resolves(native_ids: list[str]) -> None:
        bridge = IdentifierBridge()
        numbers = {native_id: bridge.generate_numeric_id(native_id) for native_id in native_ids}

        for native_id, numeric_id in numbers.items():
            assert bridge.get_native_id(numeric_id) is not None
            assert stable_hash(native_id) == numeric_id
