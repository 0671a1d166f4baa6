"""Tests for procnet_table.utils.net."""

from ipaddress import IPv4Address, IPv6Address

import pytest

from procnet_table.errors import FormatError
from procnet_table.models import Mode
from procnet_table.utils.net import (
    decode_address,
    decode_ipv4_hex,
    decode_ipv6_hex,
    encode_address,
    encode_ipv4_hex,
    encode_ipv6_hex,
    parse_address,
    swap32,
)


class TestSwap32:
    @pytest.mark.parametrize("raw, swapped", [
        (0x010000FF, 0xFF000001),
        (0x78563412, 0x12345678),
        (0x000000FA, 0xFA000000),
        (0xFA000000, 0x000000FA),
    ])
    def test_vectors(self, raw, swapped):
        assert swap32(raw) == swapped

    def test_is_its_own_inverse(self):
        for v in (0, 1, 0xDEADBEEF, 0xFFFFFFFF, 0x0100007F):
            assert swap32(swap32(v)) == v


class TestIPv4:
    @pytest.mark.parametrize("token, value", [
        ("010000FF", 0xFF000001),
        ("78563412", 0x12345678),
        ("000000FA", 0xFA000000),
        ("FA000000", 0x000000FA),
    ])
    def test_decode_vectors(self, token, value):
        assert int(decode_ipv4_hex(token)) == value

    def test_loopback(self):
        assert decode_ipv4_hex("0100007F") == IPv4Address("127.0.0.1")

    def test_lowercase_hex(self):
        assert decode_ipv4_hex("0100007f") == IPv4Address("127.0.0.1")

    def test_round_trip(self):
        for token in ("0100007F", "0302007F", "00000000", "FFFFFFFF"):
            addr = decode_ipv4_hex(token)
            assert decode_ipv4_hex(encode_ipv4_hex(addr)) == addr
            assert encode_ipv4_hex(addr) == token

    @pytest.mark.parametrize("token", ["", "0100007", "0100007F0", "0100007G", "+100007F", "0x00007F", " 100007F"])
    def test_rejects_malformed(self, token):
        with pytest.raises(FormatError) as exc:
            decode_ipv4_hex(token)
        assert exc.value.token == token


class TestIPv6:
    def test_decode_vector(self):
        addr = decode_ipv6_hex("98765432000000001234567801000000")
        assert addr.exploded == "3254:7698:0000:0000:7856:3412:0000:0001"

    def test_loopback(self):
        assert decode_ipv6_hex("00000000000000000000000001000000") == IPv6Address("::1")

    def test_public_address(self):
        addr = decode_ipv6_hex("15CB012A003E5480FFC5E05E93C650FE")
        assert addr == IPv6Address("2a01:cb15:8054:3e00:5ee0:c5ff:fe50:c693")

    def test_round_trip(self):
        token = "5014002A010C0C40000000005E000000"
        addr = decode_ipv6_hex(token)
        assert encode_ipv6_hex(addr) == token

    @pytest.mark.parametrize("token", ["0100007F", "0" * 31, "0" * 33, "Z" + "0" * 31])
    def test_rejects_malformed(self, token):
        with pytest.raises(FormatError):
            decode_ipv6_hex(token)


class TestDispatch:
    def test_by_mode(self):
        assert isinstance(decode_address("0100007F", Mode.TCP), IPv4Address)
        assert isinstance(decode_address("0100007F", Mode.UDP), IPv4Address)
        assert isinstance(decode_address("0" * 32, Mode.TCP6), IPv6Address)
        assert isinstance(decode_address("0" * 32, Mode.UDP6), IPv6Address)

    def test_wrong_width_for_mode(self):
        with pytest.raises(FormatError):
            decode_address("0100007F", Mode.TCP6)
        with pytest.raises(FormatError):
            decode_address("0" * 32, Mode.TCP)

    def test_encode_address(self):
        assert encode_address(IPv4Address("127.0.0.1")) == "0100007F"
        assert encode_address(IPv6Address("::1")) == "00000000000000000000000001000000"


class TestParseAddress:
    def test_matches_mode(self):
        assert parse_address("127.0.0.1", Mode.TCP) == IPv4Address("127.0.0.1")
        assert parse_address(" ::1 ", Mode.UDP6) == IPv6Address("::1")

    def test_family_mismatch(self):
        with pytest.raises(ValueError):
            parse_address("::1", Mode.TCP)
        with pytest.raises(ValueError):
            parse_address("127.0.0.1", Mode.TCP6)
