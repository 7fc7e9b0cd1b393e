# coding: utf-8

import re

from dn42roa.object import ValidationError

MAX_ASN = 2 ** 32 - 1

_asn_re = re.compile(r"AS([0-9]+)$")


def parse_asn(asn, permit_plain=False):
    """Parse an AS number in the form `AS<digits>` and return it as int. With
    `permit_plain`, bare digits are accepted as well. The prefix is matched
    case-insensitively."""
    if isinstance(asn, bool):
        raise ValidationError(
            "Invalid AS number {!r}: expected AS<digits>".format(asn))
    elif isinstance(asn, int):
        number = asn
    else:
        text = asn.strip()
        m = _asn_re.match(text.upper())
        if m:
            number = int(m.group(1))
        elif permit_plain and re.match(r"[0-9]+$", text):
            number = int(text)
        else:
            raise ValidationError(
                "Invalid AS number {!r}: expected AS<digits>".format(asn))
    if not 0 <= number <= MAX_ASN:
        raise ValidationError(
            "Invalid AS number {!r}: valid range is 0-{}".format(asn, MAX_ASN))
    return number


def format_asn(number):
    return "AS{}".format(number)
