import re
import binascii
from base64 import b64decode

def a2b_hex(buf, string_type="hexstr"):
    """
    buf must be in several types of hex string, or base64.
    return bytes.
    """
    if buf is None:
        return None
    if isinstance(buf, list):
        buf = "".join(buf)
    buf = buf.strip()
    if string_type == "base64":
        try:
            return b64decode(buf, validate=True)
        except binascii.Error as e:
            raise ValueError("invalid base64 string. {}".format(e)) from e
    elif string_type != "hexstr":
        raise ValueError("string_type must be hexstr or base64, but {}"
                         .format(string_type))
    if "." in buf:
        # in case like "a4.9.0.19"
        hexstr = "".join([i.rjust(2,"0") for i in buf.split(".")])
    else:
        # others
        hexstr = re.sub(r"([,\s\n]|0x)", "", buf)
    if len(hexstr)%2 == 1:
        raise ValueError("the length of hexstr is not even. len={} hexstr={}"
                         .format(len(hexstr), hexstr))
    return bytes.fromhex(hexstr)
