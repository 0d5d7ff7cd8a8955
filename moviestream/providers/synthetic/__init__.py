"""Synthetic offline provider."""

from moviestream.providers.synthetic.adapter import SyntheticAdapter

__all__ = ["SyntheticAdapter"]
