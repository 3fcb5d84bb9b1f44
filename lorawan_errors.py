#
# exceptions raised while decoding a Join-Accept.
#
# all of them are ValueError so that a caller which only catches
# ValueError for bad input keeps working.
#

class JoinAcceptError(ValueError):
    pass

class MalformedLengthError(JoinAcceptError):
    """
    the length of the message, or of the decrypted body, doesn't match
    any layout of the Join-Accept.
    """
    pass

class OutOfBoundsError(JoinAcceptError):
    """
    a field read would go beyond the end of the buffer.
    """
    pass

class KeyLengthError(JoinAcceptError):
    pass

class UnsupportedRegionError(JoinAcceptError, NotImplementedError):
    pass
