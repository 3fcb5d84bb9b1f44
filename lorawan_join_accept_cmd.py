#!/usr/bin/env python

import sys
import logging
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from lorawan_a2b_hex import a2b_hex
from lorawan_cipher import DEVNONCE_SIZE
from lorawan_errors import JoinAcceptError
from lorawan_join_accept import decode_join_accept
from lorawan_join_accept import get_devnonce
from lorawan_join_accept import CFLIST_DECODERS
from lorawan_join_accept import DEFAULT_REGION
from lorawan_report import print_join_accept

logger = logging.getLogger(__name__)

def build_parser():
    ap = ArgumentParser(
            description="""
            LoRaWAN 1.0.x Join-Accept decoder.
            It decrypts a Join-Accept with the AppKey, checks the MIC,
            and derives NwkSKey and AppSKey if the DevNonce is known.
            """,
            formatter_class=ArgumentDefaultsHelpFormatter)
    ap.add_argument("phy_pdu", metavar="PHY_PDU_STR", type=str, nargs='*',
                    help="a series or multiple of hex string, or base64.")
    ap.add_argument("--appkey", "--AppKey", action="store", dest="appkey",
                    required=True,
                    help="specify AppKey in hex.")
    # required to derive the session keys.
    ap.add_argument("--devnonce", "--DevNonce", action="store",
                    dest="devnonce",
                    help="specify DevNonce in hex, e.g. CC85 as shown by "
                    "packet decoders.")
    ap.add_argument("--join-request", action="store", dest="join_r",
                    help="specify the Join Request to take the DevNonce from.")
    ap.add_argument("--region", action="store", dest="region",
                    default=DEFAULT_REGION, choices=sorted(CFLIST_DECODERS),
                    help="specify the region to decode the CFList.")
    ap.add_argument("--from-file", action="store", dest="from_file",
                    help="specify a file or stdin to read the messages.")
    ap.add_argument("--string-type", action="store", dest="string_type",
                    default="hexstr", choices=["hexstr", "base64"],
                    help="""specify the type of string of phy_pdu,
                    either hexstr or base64.""")
    ap.add_argument("-v", action="store_true", dest="verbose",
                    help="enable verbose mode.")
    ap.add_argument("-d", action="append_const", dest="_f_debug", default=[],
                    const=1, help="increase debug mode.")
    return ap

def set_logging(debug_level):
    if debug_level > 1:
        level = logging.DEBUG
    elif debug_level == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level,
                        format="%(levelname)s:%(name)s: %(message)s")

def decode_one(phy_pdu, appkey, devnonce, opt):
    try:
        result = decode_join_accept(phy_pdu, appkey, devnonce=devnonce,
                                    region=opt.region)
    except JoinAcceptError as e:
        print("ERROR: {}".format(e), file=sys.stderr)
        return False
    print_join_accept(result, verbose=opt.verbose)
    return True

def main(argv=None):
    ap = build_parser()
    opt = ap.parse_args(argv)
    opt.debug_level = len(opt._f_debug)
    set_logging(opt.debug_level)

    try:
        appkey = a2b_hex(opt.appkey)
        if opt.devnonce is not None:
            # given in big endian.
            devnonce = a2b_hex(opt.devnonce)[::-1]
            if len(devnonce) != DEVNONCE_SIZE:
                raise ValueError("length of DevNonce must be {}, but {}."
                                 .format(DEVNONCE_SIZE, len(devnonce)))
        elif opt.join_r is not None:
            devnonce = get_devnonce(a2b_hex(opt.join_r,
                                            string_type=opt.string_type))
        else:
            devnonce = None
    except ValueError as e:
        ap.error(str(e))

    if opt.from_file:
        if opt.from_file in ["-", "stdin"]:
            lines = list(sys.stdin)
        else:
            with open(opt.from_file) as fd:
                lines = list(fd)
        pdus = [line for line in lines if line.strip()]
    else:
        if len(opt.phy_pdu) == 0:
            ap.print_help()
            return 0
        pdus = [opt.phy_pdu]

    ok = True
    for pdu in pdus:
        try:
            phy_pdu = a2b_hex(pdu, string_type=opt.string_type)
        except ValueError as e:
            print("ERROR: {}".format(e), file=sys.stderr)
            ok = False
            continue
        ok = decode_one(phy_pdu, appkey, devnonce, opt) and ok
    return 0 if ok else 1

if __name__ == "__main__":
    sys.exit(main())
