import pytest

from lorawan_cipher import lorawan_join_accept_encrypt
from lorawan_cipher import lorawan_join_accept_mic

# a Join-Accept from The Things Network with a CFList for EU868.
TTN_APPKEY = bytes.fromhex("B6B53F4A168A7A88BDF7EA135CE9CFCA")
TTN_PHY_PDU = bytes.fromhex(
    "204DD85AE608B87FC4889970B7D2042C9E72959B0057AED6094B16003DF12DE145")
# the Join-Request answered by the above.
TTN_JOIN_REQUEST = bytes.fromhex(
    "00DC0000D07ED5B3701E6FEDF57CEEAF0085CC587FE913")


def build_join_accept(appkey, fields, cflist=b"", mhdr=0x20):
    """Build an encrypted Join-Accept PHYPayload the way a join server does.

    fields: AppNonce | NetID | DevAddr | DLSettings | RxDelay in the wire order.
    """
    mic = lorawan_join_accept_mic(appkey, bytes([mhdr]) + fields + cflist)
    return bytes([mhdr]) + lorawan_join_accept_encrypt(appkey,
                                                       fields + cflist + mic)


@pytest.fixture
def ttn_appkey():
    return TTN_APPKEY


@pytest.fixture
def ttn_phy_pdu():
    return TTN_PHY_PDU
