# coding: utf-8

import enum
import logging

import netaddr

from dn42roa.nic import format_asn, parse_asn
from dn42roa.object import ObjectKind, ValidationError

logger = logging.getLogger(__name__)

family_max_length = {4: 32, 6: 128}


class MaxLengthPolicy(enum.Enum):
    """How the max-length of an authorization is derived."""
    EXACT = "exact"
    ATTRIBUTE = "attribute"
    WEAK = "weak"


class RouteEntry(object):
    """A single route origin authorization: `origin` may announce `prefix`
    and its more-specifics up to `max_length`."""

    def __init__(self, prefix, origin, max_length=None):
        if isinstance(prefix, str):
            prefix = netaddr.IPNetwork(prefix)
        elif not isinstance(prefix, netaddr.IPNetwork):
            raise TypeError(
                "Expected prefix to be str or netaddr.IPNetwork, got {}".format(
                    type(prefix)))
        if max_length is None:
            max_length = prefix.prefixlen
        if not prefix.prefixlen <= max_length <= family_max_length[prefix.version]:
            raise ValidationError(
                "Invalid max-length {} for {}: valid range is {}-{}".format(
                    max_length, prefix, prefix.prefixlen,
                    family_max_length[prefix.version]))
        self.prefix = prefix
        self.origin = int(origin)
        self.max_length = int(max_length)

    @property
    def asn(self):
        return format_asn(self.origin)

    def sort_key(self):
        return (self.prefix.version, self.prefix.first, self.prefix.prefixlen,
                self.origin, self.max_length)

    def __hash__(self):
        return hash(self.sort_key())

    def __eq__(self, other):
        if not isinstance(other, RouteEntry):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __repr__(self):
        return "<{module_name}.{class_name} {prefix} max {max_length} {asn}>".format(
            module_name=type(self).__module__,
            class_name=type(self).__name__,
            prefix=self.prefix,
            max_length=self.max_length,
            asn=self.asn)

    def to_json(self):
        return {
            "prefix": str(self.prefix),
            "maxLength": self.max_length,
            "asn": self.asn,
        }


def parse_prefix(value, version=None):
    """Parse a CIDR literal. The prefix length is mandatory and no host bits
    may be set."""
    if "/" not in value:
        raise ValidationError(
            "Invalid prefix {!r}: missing prefix length".format(value))
    try:
        network = netaddr.IPNetwork(value)
    except (netaddr.AddrFormatError, ValueError, TypeError) as err:
        raise ValidationError("Invalid prefix {!r}: {}".format(value, err))
    if version is not None and network.version != version:
        raise ValidationError(
            "Invalid prefix {!r}: expected an IPv{} prefix".format(
                value, version))
    if network.ip != network.network:
        raise ValidationError(
            "Invalid prefix {!r}: host bits set, did you mean {}?".format(
                value, network.cidr))
    return network


def derive_max_length(obj, prefix, policy=MaxLengthPolicy.EXACT):
    policy = MaxLengthPolicy(policy)
    if policy is MaxLengthPolicy.WEAK:
        return family_max_length[prefix.version]
    if policy is MaxLengthPolicy.ATTRIBUTE and "max-length" in obj:
        values = obj.get("max-length")
        if len(values) != 1:
            raise ValidationError("Multiple max-length attributes")
        try:
            return int(values[0])
        except ValueError:
            raise ValidationError(
                "Invalid max-length {!r}: not a number".format(values[0]))
    return prefix.prefixlen


def route_entries(obj, asn=None, policy=MaxLengthPolicy.EXACT, filters=None):
    """Extract the route origin authorizations described by a parsed object.

    Objects other than route and route6 yield nothing. Origins other than
    `asn` are dropped, unless `asn` is None. With `filters`, every entry is
    checked against the registry prefix filter. Raises ValidationError for
    malformed objects.
    """
    kind = obj.kind
    if kind is ObjectKind.OTHER:
        return []

    prefixes = obj.get(kind.mandatory_key)
    if len(prefixes) != 1:
        raise ValidationError(
            "Expected exactly one {!r} attribute, got {}".format(
                kind.mandatory_key, len(prefixes)))
    prefix = parse_prefix(prefixes[0], version=kind.ip_version)

    origins = obj.get("origin")
    if not origins:
        raise ValidationError(
            "Missing 'origin' attribute for {}".format(prefix))
    origins = [parse_asn(origin) for origin in origins]

    max_length = derive_max_length(obj, prefix, policy)

    entries = []
    for origin in sorted(set(origins)):
        if asn is not None and origin != asn:
            logger.debug("Dropping {} {}: origin out of scope".format(
                prefix, format_asn(origin)))
            continue
        entry = RouteEntry(prefix, origin, max_length)
        if filters is not None:
            entry = filters.apply(entry)
            if entry is None:
                continue
        entries.append(entry)
    return entries


class RoaSet(object):
    """Set of RouteEntry, iterated in canonical order: address family,
    network address, prefix length, origin, max-length."""

    def __init__(self, entries=None):
        self._entries = set()
        if entries is not None:
            self.update(entries)

    def add(self, entry):
        self._entries.add(entry)

    def update(self, entries):
        for entry in entries:
            self.add(entry)

    def sorted(self):
        return sorted(self._entries, key=RouteEntry.sort_key)

    def __iter__(self):
        return iter(self.sorted())

    def __len__(self):
        return len(self._entries)

    def __contains__(self, entry):
        return entry in self._entries

    def __bool__(self):
        return bool(self._entries)


def aggregate(entries):
    """Deduplicate entries and return them in canonical order."""
    return RoaSet(entries).sorted()
