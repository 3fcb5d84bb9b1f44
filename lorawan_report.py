import sys
from lorawan_fields import x2bin

# the report shows multi-octet values in big endian.
# with verbose, the wire format (little endian) or bits are shown in [].

def formx(v, form=None):
    """
    convert a value into a string with a type of value.
    """
    if isinstance(v, int) and form == "freq":
        return "{:.1f} MHz".format(v/1e6)
    elif isinstance(v, int) and form == "sec":
        return "{} sec".format(v)
    elif isinstance(v, int):
        return "x {:02x}".format(v)
    elif isinstance(v, (bytes,bytearray)):
        return "x {}".format(v.hex())
    elif isinstance(v, str) and form == "bin":
        return "b {}".format(v)
    else:
        raise ValueError("ERROR: unsupported arg for formx, {} type={}"
                         .format(v,type(v)))

class Report():
    def __init__(self, verbose=False, file=None):
        self.verbose = verbose
        self.file = file if file is not None else sys.stdout

    def print_vt(self, tag, v_wire=None, v_bits=None, indent=0):
        """
        print a value with tag as a title.
        """
        bullet = " "*(2*indent) + "#"*(2+indent)
        line = "{} {}".format(bullet, tag)
        if v_wire not in ["", None]:
            line += " : {}".format(v_wire)
        if self.verbose and v_bits not in ["", None]:
            line += " [{}]".format(v_bits)
        print(line, file=self.file)

    def print_v(self, tag, v_host=None, v_wire=None, indent=1):
        """
        print a value with tag.
            v_host: string of human readable, or None.
            v_wire: string in the wire, or None.
        """
        line = "{}{}".format("  "*indent, tag)
        if v_host not in ["", None]:
            line += " : {}".format(v_host)
        if self.verbose and v_wire not in ["", None]:
            line += " [{}]".format(v_wire)
        print(line, file=self.file)

    def print_w(self, msg):
        print("WARNING: {}".format(msg), file=self.file)

def print_join_accept(result, verbose=False, file=None):
    """
    print a JoinAcceptResult.
    """
    r = Report(verbose=verbose, file=file)
    ja = result.join_accept
    mhdr = ja.mhdr
    print("=== PHYPayload ===", file=r.file)
    r.print_vt("MHDR", formx(mhdr.octet), formx(x2bin(mhdr.octet),"bin"))
    r.print_v("MType", mhdr.mtype_name, formx(x2bin(mhdr.mtype)[-3:],"bin"))
    r.print_v("Major", "LoRaWAN R1" if mhdr.major == 0 else "RFU",
              formx(x2bin(mhdr.major)[-2:],"bin"))
    r.print_vt("JoinAccept", formx(result.decrypted))
    r.print_v("AppNonce", formx(ja.app_nonce_be), formx(ja.app_nonce))
    r.print_v("NetID", formx(ja.net_id_be), formx(ja.net_id))
    r.print_v("NwkID", formx(ja.nwk_id), formx(x2bin(ja.nwk_id)[-7:],"bin"),
              indent=2)
    r.print_v("DevAddr", formx(ja.dev_addr_be), formx(ja.dev_addr))
    dls = ja.dl_settings
    r.print_v("DLSettings", formx(dls.octet), formx(x2bin(dls.octet),"bin"))
    r.print_v("RX1DROffset", dls.rx1_dr_offset, indent=2)
    r.print_v("RX2DataRate", dls.rx2_data_rate, indent=2)
    r.print_v("RxDelay", formx(ja.rx_delay.seconds,"sec"),
              formx(ja.rx_delay.octet))
    if ja.cflist is not None:
        cfl = ja.cflist
        r.print_v("CFList", formx(cfl.raw))
        for i, (f, f_hz) in enumerate(zip(cfl.frequencies,
                                          cfl.frequencies_hz)):
            r.print_v("CF{}".format(cfl.first_channel+i),
                      "disabled" if f == 0 else formx(f_hz,"freq"),
                      "{}".format(f), indent=2)
        r.print_v("RFU", formx(cfl.rfu), indent=2)
    r.print_vt("MIC")
    r.print_v("MIC in frame", formx(ja.mic))
    r.print_v("MIC Derived ", formx(result.mic_derived))
    if result.mic_valid:
        r.print_v("MIC Check", "OK")
    else:
        r.print_v("MIC Check", "NG")
        r.print_w("MIC mismatch, the AppKey is wrong or the message is altered.")
    if result.session_keys is not None:
        r.print_vt("Session Keys")
        r.print_v("NwkSKey", formx(result.session_keys.nwkskey))
        r.print_v("AppSKey", formx(result.session_keys.appskey))
