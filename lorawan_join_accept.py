import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional, Tuple
from lorawan_cipher import lorawan_join_accept_decrypt
from lorawan_cipher import lorawan_join_accept_mic_verify
from lorawan_cipher import lorawan_get_keys
from lorawan_cipher import MIC_SIZE
from lorawan_cipher import DEVNONCE_SIZE
from lorawan_cipher import APPNONCE_SIZE
from lorawan_cipher import NETID_SIZE
from lorawan_errors import MalformedLengthError
from lorawan_errors import UnsupportedRegionError
from lorawan_fields import FieldReader
from lorawan_fields import bits
from lorawan_fields import x2int

# Join-Accept (LoRaWAN 1.0.x), after decryption:
#
#   Size (bytes):  3        3       4         1           1       (16)     4
#   Fields:     AppNonce  NetID  DevAddr  DLSettings  RxDelay  (CFList)  MIC
#
# Each multi-octet field is in little endian.

DEVADDR_SIZE = 4
CFLIST_SIZE = 16
JOIN_ACCEPT_FIXED_SIZE = APPNONCE_SIZE + NETID_SIZE + DEVADDR_SIZE + 1 + 1

# Join-Request: MHDR | AppEUI | DevEUI | DevNonce | MIC
JOIN_REQUEST_SIZE = 1 + 8 + 8 + DEVNONCE_SIZE + MIC_SIZE

# (mask, shift)
MHDR_MTYPE = (0xe0, 5)
MHDR_RFU = (0x1c, 2)
MHDR_MAJOR = (0x03, 0)
DLSETTINGS_RFU = (0x80, 7)
DLSETTINGS_RX1DROFFSET = (0x70, 4)
DLSETTINGS_RX2DATARATE = (0x0f, 0)
RXDELAY_DEL = (0x0f, 0)

MTYPE_JOIN_REQUEST = 0
MTYPE_JOIN_ACCEPT = 1
MTYPE_NAMES = {
        0: "Join Request",
        1: "Join Accept",
        2: "Unconfirmed Data Up",
        3: "Unconfirmed Data Down",
        4: "Confirmed Data Up",
        5: "Confirmed Data Down",
        6: "RFU",
        7: "Proprietary",
        }

CFLIST_NB_FREQ = 5
CFLIST_FREQ_SIZE = 3
# a frequency in the CFList is in 100 Hz.
CFLIST_FREQ_UNIT = 100

DEFAULT_REGION = "EU868"

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class MHDR:
    """
    MHDR
        7 6 5 | 4 3 2 |  1 0
        MType |  RFU  | Major
    """
    octet: int

    @property
    def mtype(self):
        return bits(self.octet, *MHDR_MTYPE)

    @property
    def rfu(self):
        return bits(self.octet, *MHDR_RFU)

    @property
    def major(self):
        return bits(self.octet, *MHDR_MAJOR)

    @property
    def mtype_name(self):
        return MTYPE_NAMES[self.mtype]

    def to_bytes(self):
        return bytes([self.octet])

@dataclass(frozen=True)
class DLSettings:
    """
    DLSettings
          7  |    6 5 4    |    3 2 1 0
         RFU | RX1DRoffset | RX2DataRate
    """
    octet: int

    @property
    def rfu(self):
        return bits(self.octet, *DLSETTINGS_RFU)

    @property
    def rx1_dr_offset(self):
        return bits(self.octet, *DLSETTINGS_RX1DROFFSET)

    @property
    def rx2_data_rate(self):
        return bits(self.octet, *DLSETTINGS_RX2DATARATE)

@dataclass(frozen=True)
class RxDelay:
    octet: int

    @property
    def delay(self):
        return bits(self.octet, *RXDELAY_DEL)

    @property
    def seconds(self):
        # 0 means 1 second as well as 1.
        return self.delay or 1

@dataclass(frozen=True)
class CFList:
    raw: bytes
    region: str
    first_channel: int
    frequencies: Tuple[int, ...]
    rfu: int

    @property
    def frequencies_hz(self):
        return tuple(f * CFLIST_FREQ_UNIT for f in self.frequencies)

@dataclass(frozen=True)
class JoinAccept:
    """
    a decrypted Join-Accept.
    app_nonce, net_id and dev_addr are kept in the wire order because
    the MIC and the session keys are calculated over them.
    use the *_be properties to show them.
    """
    mhdr: MHDR
    app_nonce: bytes
    net_id: bytes
    dev_addr: bytes
    dl_settings: DLSettings
    rx_delay: RxDelay
    cflist: Optional[CFList]
    mic: bytes

    @property
    def app_nonce_be(self):
        return self.app_nonce[::-1]

    @property
    def net_id_be(self):
        return self.net_id[::-1]

    @property
    def dev_addr_be(self):
        return self.dev_addr[::-1]

    @property
    def nwk_id(self):
        # the 7 LSBs of the NetID, also the 7 MSBs of the DevAddr.
        return self.net_id[0] & 0x7f

    def mic_input(self):
        """
        MHDR | AppNonce | NetID | DevAddr | DLSettings | RxDelay | CFList
        in the wire order. the CFList is included with its RFU octet.
        """
        buf = (self.mhdr.to_bytes() + self.app_nonce + self.net_id +
               self.dev_addr +
               bytes([self.dl_settings.octet, self.rx_delay.octet]))
        if self.cflist is not None:
            buf += self.cflist.raw
        return buf

@dataclass(frozen=True)
class SessionKeys:
    nwkskey: bytes
    appskey: bytes

@dataclass(frozen=True)
class JoinAcceptResult:
    join_accept: JoinAccept
    decrypted: bytes
    mic_derived: bytes
    mic_valid: bool
    session_keys: Optional[SessionKeys] = None

#====

def parse_mhdr(mhdr):
    """
    mhdr: 1 byte int.
    """
    return MHDR(mhdr)

def decode_cflist_frequencies(cflist_x, region, first_channel):
    """
    CFList of the frequency list type.
        5 x 3 bytes of frequency in little endian, and 1 byte of RFU.
    the RFU byte is kept as it is.
    """
    reader = FieldReader(cflist_x)
    freqs = tuple(x2int(reader.read(CFLIST_FREQ_SIZE))
                  for _ in range(CFLIST_NB_FREQ))
    rfu = reader.read_octet()
    return CFList(raw=bytes(cflist_x), region=region,
                  first_channel=first_channel, frequencies=freqs, rfu=rfu)

CFLIST_DECODERS = {
        "EU868": partial(decode_cflist_frequencies, region="EU868",
                         first_channel=3),
        "AS923": partial(decode_cflist_frequencies, region="AS923",
                         first_channel=2),
        }

def decode_cflist(cflist_x, region):
    try:
        decoder = CFLIST_DECODERS[region.upper()]
    except (KeyError, AttributeError):
        raise UnsupportedRegionError(
                "CFList of {} is not implemented yet.".format(region)
                ) from None
    return decoder(cflist_x)

def parse_join_accept(mhdr, decrypted, region=DEFAULT_REGION):
    """
    JoinAccept parser
        mhdr: 1 byte int, or MHDR.
        decrypted: Join-Accept | MIC after decryption.
        region: selects the CFList decoder when the CFList exists.
    The CFList exists only if exactly 20 bytes remain after the fixed part.
    Any other length is rejected.
    """
    if not isinstance(mhdr, MHDR):
        mhdr = parse_mhdr(mhdr)
    if len(decrypted) < JOIN_ACCEPT_FIXED_SIZE + MIC_SIZE:
        raise MalformedLengthError(
                "length of Join-Accept must be {} or {}, but {}."
                .format(JOIN_ACCEPT_FIXED_SIZE + MIC_SIZE,
                        JOIN_ACCEPT_FIXED_SIZE + CFLIST_SIZE + MIC_SIZE,
                        len(decrypted)))
    reader = FieldReader(decrypted)
    app_nonce = reader.read(APPNONCE_SIZE)
    net_id = reader.read(NETID_SIZE)
    dev_addr = reader.read(DEVADDR_SIZE)
    dl_settings = DLSettings(reader.read_octet())
    rx_delay = RxDelay(reader.read_octet())
    if reader.remaining() == MIC_SIZE:
        cflist = None
    elif reader.remaining() == CFLIST_SIZE + MIC_SIZE:
        cflist = decode_cflist(reader.read(CFLIST_SIZE), region)
    else:
        raise MalformedLengthError(
                "{} bytes remain after the fixed fields, must be {} or {}."
                .format(reader.remaining(), MIC_SIZE,
                        CFLIST_SIZE + MIC_SIZE))
    mic = reader.read(MIC_SIZE)
    return JoinAccept(mhdr=mhdr, app_nonce=app_nonce, net_id=net_id,
                      dev_addr=dev_addr, dl_settings=dl_settings,
                      rx_delay=rx_delay, cflist=cflist, mic=mic)

def decode_join_accept(phy_pdu, appkey, devnonce=None, region=DEFAULT_REGION):
    """
    decrypt, parse and validate a Join-Accept PHYPayload.
        phy_pdu: MHDR | encrypted (Join-Accept | MIC)
        appkey: 16 bytes.
        devnonce: 2 bytes in the wire order, or None.
            it comes from the Join-Request. if None, the session keys are
            not derived.
        region: see CFLIST_DECODERS.
    A MIC mismatch doesn't raise. check mic_valid of the result.
    """
    phy_pdu = bytes(phy_pdu)
    if len(phy_pdu) < 1:
        raise MalformedLengthError("phy_pdu must need more than 1 bytes.")
    mhdr = parse_mhdr(phy_pdu[0])
    if mhdr.mtype != MTYPE_JOIN_ACCEPT:
        logger.warning("MType is %s, not Join Accept.", mhdr.mtype_name)
    decrypted = lorawan_join_accept_decrypt(appkey, phy_pdu[1:])
    join_accept = parse_join_accept(mhdr, decrypted, region=region)
    mic_derived, mic_valid = lorawan_join_accept_mic_verify(appkey,
                                                            join_accept)
    session_keys = None
    if devnonce is not None:
        session_keys = SessionKeys(*lorawan_get_keys(
                appkey, join_accept.app_nonce, join_accept.net_id,
                devnonce))
    else:
        logger.info("session keys are not derived due to no DevNonce.")
    return JoinAcceptResult(join_accept=join_accept, decrypted=decrypted,
                            mic_derived=mic_derived, mic_valid=mic_valid,
                            session_keys=session_keys)

def get_devnonce(join_request):
    """
    take the DevNonce out of a Join-Request PHYPayload.
        MHDR | AppEUI | DevEUI | DevNonce | MIC
         1   |   8    |   8    |    2     |  4
        return: 2 bytes in the wire order.
    """
    join_request = bytes(join_request)
    if len(join_request) != JOIN_REQUEST_SIZE:
        raise MalformedLengthError(
                "length of PHY PDU of Join Request must be {}, but {}."
                .format(JOIN_REQUEST_SIZE, len(join_request)))
    reader = FieldReader(join_request)
    mhdr = parse_mhdr(reader.read_octet())
    if mhdr.mtype != MTYPE_JOIN_REQUEST:
        raise ValueError("MType of the Join Request must be {}, but {}."
                         .format(MTYPE_NAMES[MTYPE_JOIN_REQUEST],
                                 mhdr.mtype_name))
    reader.read(8)
    reader.read(8)
    return reader.read(DEVNONCE_SIZE)
