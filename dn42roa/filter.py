# coding: utf-8

import logging
import os.path

import netaddr

from dn42roa.object import ValidationError
from dn42roa.roa import RouteEntry

logger = logging.getLogger(__name__)

filter_files = ["filter.txt", "filter6.txt"]


class FilterRule(object):
    def __init__(self, number, permit, network, min_length, max_length):
        self.number = number
        self.permit = permit
        self.network = network
        self.min_length = min_length
        self.max_length = max_length

    def matches(self, prefix):
        return prefix.version == self.network.version and \
            prefix.network in self.network

    def __repr__(self):
        return "<{}.{} {} {} {} {} {}>".format(
            type(self).__module__,
            type(self).__name__,
            self.number,
            "permit" if self.permit else "deny",
            self.network,
            self.min_length,
            self.max_length)


def parse_rule(line):
    """Parse one line of a filter file. Returns None for lines which are not
    rules, and for malformed rules."""
    if not line or not line[0].isdigit():
        return None
    fields = line.split("#", 1)[0].split()
    if len(fields) < 5:
        return None
    number, action, network, min_length, max_length = fields[:5]
    if action not in {"permit", "deny"}:
        return None
    try:
        return FilterRule(int(number), action == "permit",
                          netaddr.IPNetwork(network),
                          int(min_length), int(max_length))
    except (netaddr.AddrFormatError, ValueError):
        return None


def parse_filter(lines):
    for line in lines:
        rule = parse_rule(line)
        if rule is not None:
            yield rule


class PrefixFilter(object):
    """Ordered list of filter rules; the first rule containing a prefix
    decides about it."""

    def __init__(self, rules=None):
        self.rules = list(rules or [])

    def extend(self, rules):
        self.rules.extend(rules)

    def find(self, prefix):
        for rule in self.rules:
            if rule.matches(prefix):
                return rule

    def apply(self, entry):
        """Return `entry` with its max-length clamped to the matching permit
        rule, or None if the entry is denied or too specific. Raises
        ValidationError if no rule matches."""
        rule = self.find(entry.prefix)
        if rule is None:
            raise ValidationError(
                "Prefix {} is not within any filter range".format(
                    entry.prefix))
        if not rule.permit:
            logger.debug("Dropping {}: denied by filter rule {}".format(
                entry.prefix, rule.number))
            return None
        max_length = min(max(entry.max_length, rule.min_length),
                         rule.max_length)
        if entry.prefix.prefixlen > max_length:
            logger.debug(
                "Dropping {}: more specific than /{} permitted by filter "
                "rule {}".format(entry.prefix, max_length, rule.number))
            return None
        if max_length == entry.max_length:
            return entry
        return RouteEntry(entry.prefix, entry.origin, max_length)

    def __len__(self):
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    @classmethod
    def from_directory(cls, path):
        """Load filter.txt and filter6.txt from a registry data directory.
        Raises FileNotFoundError if either is missing."""
        prefix_filter = cls()
        for name in filter_files:
            with open(os.path.join(path, name), encoding="utf-8") as fh:
                prefix_filter.extend(parse_filter(fh))
        logger.debug("Loaded {} filter rules from {}".format(
            len(prefix_filter), path))
        return prefix_filter
