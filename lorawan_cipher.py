import hmac
import logging
from aes_ecb import aes128_encrypt
from aes_ecb import aes128_decrypt
from aes_ecb import AES_KEY_SIZE
from aes_cmac import aes128_cmac
from lorawan_errors import KeyLengthError
from lorawan_errors import MalformedLengthError

# Note:
#     Unlike the report, the arguments of the following functions are
#     ordered as they are in the wire, i.e. in little endian.
#     e.g.
#     The devaddr is "12345678", which is "78563412" in the wire format.
#     It must be passed as "78563412".

MIC_SIZE = 4
APPNONCE_SIZE = 3
NETID_SIZE = 3
DEVNONCE_SIZE = 2

logger = logging.getLogger(__name__)

def check_key(key):
    if key is None or len(key) != AES_KEY_SIZE:
        raise KeyLengthError("length of AppKey must be {} bytes, but {}."
                             .format(AES_KEY_SIZE,
                                     None if key is None else len(key)))

def lorawan_join_accept_decrypt(appkey, body):
    """
    decrypt the Join-Accept, i.e. the PHYPayload without the MHDR.
        appkey: 16 bytes.
        body: Join-Accept | MIC, a multiple of 16 bytes.
        return: plain text in bytes, the same length as body.

    The network server uses aes128_decrypt in ECB mode to encrypt the
    Join-Accept so that the end-device only needs aes128_encrypt.
    So, it's correct to use aes128_encrypt here.
    """
    check_key(appkey)
    logger.debug("Join-Accept encrypted: %s (%d bytes)",
                 bytes(body).hex(), len(body))
    plain = aes128_encrypt(appkey, body)
    logger.debug("Join-Accept decrypted: %s", plain.hex())
    return plain

def lorawan_join_accept_encrypt(appkey, plain):
    """
    the join server side of lorawan_join_accept_decrypt().
        plain: Join-Accept | MIC, a multiple of 16 bytes.
    """
    check_key(appkey)
    return aes128_decrypt(appkey, plain)

def lorawan_join_accept_mic(appkey, msg):
    """
    calculating the MIC of the Join-Accept.
        msg: MHDR | AppNonce | NetID | DevAddr | DLSettings | RxDelay | CFList
        return: 4 bytes MIC in the wire order.

    cmac = aes128_cmac(AppKey, msg)
    MIC = cmac[0..3]
    """
    check_key(appkey)
    logger.debug("MIC input: %s", bytes(msg).hex())
    mic = aes128_cmac(appkey, msg, size=MIC_SIZE)
    logger.debug("MIC derived: %s", mic.hex())
    return mic

def lorawan_join_accept_mic_verify(appkey, join_accept):
    """
    recompute the MIC of a parsed Join-Accept and compare it with
    the MIC in the frame.
        return: a tuple of (mic_derived, valid).
    a mismatch is not an error. the caller decides what to do.
    """
    mic_derived = lorawan_join_accept_mic(appkey, join_accept.mic_input())
    valid = hmac.compare_digest(mic_derived, join_accept.mic)
    if not valid:
        logger.warning("MIC mismatch: in frame %s, derived %s",
                       join_accept.mic.hex(), mic_derived.hex())
    return mic_derived, valid

def lorawan_get_keys(appkey, appnonce, netid, devnonce):
    """
    Generating LoRaWAN Keys for v1.0.x.
        all arguments are in bytes, in the wire order.
        appnonce: 3 bytes, netid: 3 bytes, devnonce: 2 bytes.
        return is a tuple of (NwkSKey, AppSKey).

    NwkSKey = aes128_encrypt(AppKey, 0x01 | AppNonce | NetID | DevNonce | pad16)
    AppSKey = aes128_encrypt(AppKey, 0x02 | AppNonce | NetID | DevNonce | pad16)
    """
    check_key(appkey)
    for name, v, size in [("AppNonce", appnonce, APPNONCE_SIZE),
                          ("NetID", netid, NETID_SIZE),
                          ("DevNonce", devnonce, DEVNONCE_SIZE)]:
        if len(v) != size:
            raise MalformedLengthError("length of {} must be {}, but {}."
                                       .format(name, size, len(v)))
    base_data = bytes(appnonce) + bytes(netid) + bytes(devnonce)
    pad16 = b"\x00"*(16-1-len(base_data))
    nwkskey = aes128_encrypt(appkey, b"\x01" + base_data + pad16)
    appskey = aes128_encrypt(appkey, b"\x02" + base_data + pad16)
    return nwkskey, appskey
