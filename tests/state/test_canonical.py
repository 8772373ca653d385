from __future__ import annotations

import pytest

from pairswap.state.canonical import (
    canonical_hex_fixed_allow_0x,
    canonical_json_bytes,
    domain_sep_bytes,
    hex_to_bytes_allow_0x,
)


def test_canonical_json_sorted_and_compact() -> None:
    assert canonical_json_bytes({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'


def test_canonical_json_rejects_floats() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes({"fee": 0.01})


def test_canonical_json_rejects_surrogates() -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes("\ud800")


def test_domain_sep_is_nul_terminated() -> None:
    assert domain_sep_bytes("pairswap_admin:x") == b"pairswap:pairswap_admin:x:v1\x00"
    with pytest.raises(ValueError):
        domain_sep_bytes("bad\x00label")
    with pytest.raises(ValueError):
        domain_sep_bytes("label", version=0)


def test_hex_fixed_width() -> None:
    assert hex_to_bytes_allow_0x("0x0a0B", name="k", nbytes=2) == b"\x0a\x0b"
    assert canonical_hex_fixed_allow_0x("0A0B", nbytes=2, name="k") == "0x0a0b"
    with pytest.raises(ValueError):
        hex_to_bytes_allow_0x("0x0a", name="k", nbytes=2)
    with pytest.raises(ValueError):
        hex_to_bytes_allow_0x("zz", name="k", nbytes=1)
