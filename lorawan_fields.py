from lorawan_errors import OutOfBoundsError

# NOTE:
#   In LoRaWAN, the network byte order is little endian.
#   Each multi-octet field must be read as little endian.

class FieldReader():
    """
    sequential reader of fields in a fixed layout buffer.
    the buffer is owned by the caller. it is viewed read-only, not copied.
    each field read is returned as bytes.

    >>> r = FieldReader(b"\\x01\\x02\\x03")
    >>> r.read(2)
    b'\\x01\\x02'
    >>> r.remaining()
    1
    """
    def __init__(self, buf):
        self.buf = memoryview(buf).toreadonly()
        self.offset = 0

    def remaining(self):
        return len(self.buf) - self.offset

    def read(self, size):
        if size < 0 or size > self.remaining():
            raise OutOfBoundsError(
                    "can't read {} bytes at offset {}, {} bytes remain."
                    .format(size, self.offset, self.remaining()))
        v = bytes(self.buf[self.offset:self.offset + size])
        self.offset += size
        return v

    def read_octet(self):
        return self.read(1)[0]

def bits(octet, mask, shift):
    """
    extract a sub-field from a single octet.
        octet: int
        mask: the mask of the sub-field in the octet.
        shift: the position of the least significant bit of the sub-field.
    """
    return (octet & mask) >> shift

def x2int(v):
    """
    convert a little endian field of 1 to 4 bytes into an unsigned int.
    """
    if not 1 <= len(v) <= 4:
        raise OutOfBoundsError("width of an int field must be 1 to 4 bytes, "
                               "but {}.".format(len(v)))
    return int.from_bytes(v, "little")

def x2bin(v):
    """
    convert a value into a binary string
        v: int, bytes, bytearray
    bytes, bytearray must be in *big* endian.
    """
    if isinstance(v, int):
        return bin(v)[2:].zfill(8)
    return bin(int.from_bytes(v, "big"))[2:].zfill(len(v)*8)
