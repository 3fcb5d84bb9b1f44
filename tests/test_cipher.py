import pytest
from Crypto.Cipher import AES

from lorawan_cipher import (lorawan_get_keys, lorawan_join_accept_decrypt,
                            lorawan_join_accept_encrypt,
                            lorawan_join_accept_mic)
from lorawan_errors import KeyLengthError, MalformedLengthError

APPKEY = bytes(16)


def test_decrypt_undoes_server_encryption():
    plain = bytes(range(32))
    enc = lorawan_join_accept_encrypt(APPKEY, plain)
    assert enc != plain
    assert lorawan_join_accept_decrypt(APPKEY, enc) == plain


def test_decrypt_is_aes_encrypt():
    body = bytes(range(16))
    expected = AES.new(APPKEY, AES.MODE_ECB).encrypt(body)
    assert lorawan_join_accept_decrypt(APPKEY, body) == expected


def test_decrypt_zero_key_join_accept():
    # wire : 20 ED8D1A 7B11EA CDD3F52D FC 39 0FFF77E2
    # plain:    248870 010000 248DE503 02 01 88639B03
    body = bytes.fromhex("ED8D1A7B11EACDD3F52DFC390FFF77E2")
    plain = lorawan_join_accept_decrypt(APPKEY, body)
    assert plain == bytes.fromhex("248870 010000 248DE503 02 01 88639B03")


def test_mic_zero_key_join_accept():
    msg = bytes.fromhex("20" "248870" "010000" "248DE503" "02" "01")
    assert lorawan_join_accept_mic(APPKEY, msg) == bytes.fromhex("88639B03")


@pytest.mark.parametrize("size", [0, 15, 17, 31, 33])
def test_decrypt_rejects_partial_blocks(size):
    with pytest.raises(MalformedLengthError):
        lorawan_join_accept_decrypt(APPKEY, bytes(size))


def test_decrypt_rejects_bad_key():
    with pytest.raises(KeyLengthError):
        lorawan_join_accept_decrypt(bytes(15), bytes(16))
    with pytest.raises(KeyLengthError):
        lorawan_join_accept_mic(None, b"\x20")


def test_get_keys_blocks():
    appkey = bytes.fromhex("B6B53F4A168A7A88BDF7EA135CE9CFCA")
    appnonce = bytes.fromhex("3A06E5")
    netid = bytes.fromhex("130000")
    devnonce = bytes.fromhex("85CC")
    nwkskey, appskey = lorawan_get_keys(appkey, appnonce, netid, devnonce)
    cipher = AES.new(appkey, AES.MODE_ECB)
    block = appnonce + netid + devnonce + bytes(7)
    assert nwkskey == cipher.encrypt(b"\x01" + block)
    assert appskey == cipher.encrypt(b"\x02" + block)
    assert len(nwkskey) == len(appskey) == 16
    assert nwkskey != appskey


def test_get_keys_deterministic_and_devnonce_sensitive():
    appnonce = b"\x01\x02\x03"
    netid = b"\x13\x00\x00"
    k1 = lorawan_get_keys(APPKEY, appnonce, netid, b"\x00\x01")
    k2 = lorawan_get_keys(APPKEY, appnonce, netid, b"\x00\x01")
    k3 = lorawan_get_keys(APPKEY, appnonce, netid, b"\x00\x02")
    assert k1 == k2
    assert k1[0] != k3[0]
    assert k1[1] != k3[1]


@pytest.mark.parametrize("devnonce", [b"", b"\x01", b"\x01\x02\x03"])
def test_get_keys_devnonce_length(devnonce):
    with pytest.raises(MalformedLengthError):
        lorawan_get_keys(APPKEY, b"\x01\x02\x03", b"\x13\x00\x00", devnonce)


@pytest.mark.parametrize("appnonce, netid", [
    (b"\x01\x02\x03\x04", b"\x13\x00"),
    (b"\x01\x02", b"\x13\x00\x00"),
    (b"\x01\x02\x03", b"\x13\x00\x00\x00"),
    (b"\x01\x02\x03", b""),
])
def test_get_keys_nonce_lengths(appnonce, netid):
    with pytest.raises(MalformedLengthError):
        lorawan_get_keys(APPKEY, appnonce, netid, b"\x00\x01")
