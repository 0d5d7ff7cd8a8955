"""Numeric identifier bridge for string-ID providers.

OMDb identifies titles by IMDb strings (``tt0133093``) while the rest of
the app addresses titles by integer. The bridge hashes every observed
native id to a non-negative integer and remembers the pair so lookups
can be reversed.

Collisions are not resolved: two native ids hashing to the same number
overwrite each other and the later one wins.
"""

import logging

logger = logging.getLogger(__name__)

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000

CAST_ID_MODULUS = 10_000_000


def stable_hash(text: str) -> int:
    """Deterministic 32-bit rolling hash of a string.

    Computes ``h = h * 31 + unit`` over the UTF-16 code units of ``text``
    in signed 32-bit arithmetic and returns the absolute value.

    Args:
        text: String to hash.

    Returns:
        Non-negative integer below 2**31 + 1.
    """
    acc = 0
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        acc = (acc * 31 + unit) & _INT32_MASK
    if acc & _INT32_SIGN:
        acc -= 1 << 32
    return abs(acc)


def cast_member_id(name: str) -> int:
    """Derive a synthetic cast id from a person's name."""
    return stable_hash(name.lower().strip()) % CAST_ID_MODULUS


class IdentifierBridge:
    """Reversible mapping between native string ids and numeric ids.

    One instance is shared by reference between every adapter that needs
    it. Writes are idempotent, so concurrent registration of the same id
    needs no lock.
    """

    def __init__(self) -> None:
        self._native_by_numeric: dict[int, str] = {}

    def generate_numeric_id(self, native_id: str) -> int:
        """Hash a native id and register the mapping.

        Args:
            native_id: Provider identifier (e.g. ``tt0133093``).

        Returns:
            Numeric identifier, stable for the same input.
        """
        numeric_id = stable_hash(native_id)
        previous = self._native_by_numeric.get(numeric_id)
        if previous is not None and previous != native_id:
            logger.debug(f"Identifier collision on {numeric_id}: {previous} -> {native_id}")
        self._native_by_numeric[numeric_id] = native_id
        return numeric_id

    def get_native_id(self, numeric_id: int) -> str | None:
        """Look up the native id registered for a numeric id.

        Returns:
            Native id, or None if it was never generated in this scope.
        """
        return self._native_by_numeric.get(numeric_id)

    def clear(self) -> None:
        """Forget every registered mapping."""
        self._native_by_numeric.clear()

    def size(self) -> int:
        """Number of registered mappings."""
        return len(self._native_by_numeric)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, numeric_id: object) -> bool:
        return numeric_id in self._native_by_numeric
