import base64

import pytest

from lorawan_a2b_hex import a2b_hex

EXPECTED = bytes.fromhex("40C1D25201A5050003070703120864FE226A9E")


@pytest.mark.parametrize("s", [
    "40C1D25201A5050003070703120864FE226A9E",
    "40C1, D252, 01A5, 0500, 0307, 0703, 1208, 64FE, 226A, 9E",
    "40C1 D252 01A5 0500 0307 0703 1208 64FE 226A 9E\n",
    "0x40 0xC1 0xD2 0x52 0x01 0xA5 0x05 0x00 0x03 0x07 0x07 0x03 0x12 0x08 "
    "0x64 0xFE 0x22 0x6A 0x9E",
    "40.c1.d2.52.1.a5.5.0.3.7.7.3.12.8.64.fe.22.6a.9e",
    ["40C1D252", "01A5050003070703120864FE226A9E"],
])
def test_hex_forms(s):
    assert a2b_hex(s) == EXPECTED


def test_base64():
    s = base64.b64encode(EXPECTED).decode()
    assert a2b_hex(s, string_type="base64") == EXPECTED


def test_none():
    assert a2b_hex(None) is None


@pytest.mark.parametrize("s, string_type", [
    ("40C", "hexstr"),
    ("zz", "hexstr"),
    ("not base64!", "base64"),
    ("40", "binary"),
])
def test_errors(s, string_type):
    with pytest.raises(ValueError):
        a2b_hex(s, string_type=string_type)
