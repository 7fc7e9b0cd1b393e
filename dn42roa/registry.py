# coding: utf-8

import logging
import os
import os.path

from dn42roa.filter import PrefixFilter
from dn42roa.object import ReadError, ValidationError, parse_object, read_record
from dn42roa.roa import MaxLengthPolicy, route_entries

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when the registry as a whole cannot be used."""


class Diagnostic(object):
    """A problem with a single object file, which was skipped."""

    def __init__(self, path, message):
        self.path = path
        self.message = message

    def __str__(self):
        return "{}: {}".format(self.path, self.message)

    def __repr__(self):
        return "<{}.{} {}>".format(
            type(self).__module__, type(self).__name__, self)

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return (self.path, self.message) == (other.path, other.message)

    def __hash__(self):
        return hash((self.path, self.message))


class Registry(object):
    """A registry checkout on disk. Route objects are looked up below
    `<root>/data/` if that directory exists, else below `<root>`."""

    object_classes = ["route", "route6"]

    def __init__(self, root_dir="."):
        if not os.path.isdir(root_dir):
            raise RegistryError(
                "Registry directory {} does not exist or is not a "
                "directory".format(root_dir))
        try:
            os.listdir(root_dir)
        except OSError as err:
            raise RegistryError(
                "Registry directory {} is not readable: {}".format(
                    root_dir, err))
        self.root_dir = root_dir
        data_dir = os.path.join(root_dir, "data")
        if os.path.isdir(data_dir):
            self.data_dir = data_dir
        else:
            self.data_dir = root_dir
        if not any(os.path.isdir(self.class_dir(object_class))
                   for object_class in self.object_classes):
            raise RegistryError(
                "Registry directory {} has no {} directory".format(
                    root_dir, " or ".join(self.object_classes)))

    def class_dir(self, object_class):
        return os.path.join(self.data_dir, object_class)

    def list(self, diagnostics=None):
        """Yield the paths of all candidate object files, in sorted order per
        object class."""
        for object_class in self.object_classes:
            path = self.class_dir(object_class)
            if not os.path.isdir(path):
                logger.warning("No {} directory in registry {}".format(
                    object_class, self.root_dir))
                continue
            try:
                names = sorted(os.listdir(path))
            except OSError as err:
                logger.warning("Cannot list {}: {}".format(path, err))
                if diagnostics is not None:
                    diagnostics.append(Diagnostic(path, str(err)))
                continue
            for name in names:
                if name[0] == '.':
                    continue
                file_path = os.path.join(path, name)
                if os.path.isdir(file_path):
                    continue
                yield file_path

    def load_filter(self):
        try:
            return PrefixFilter.from_directory(self.data_dir)
        except OSError as err:
            raise RegistryError(
                "Cannot load prefix filter from {}: {}".format(
                    self.data_dir, err))

    def walk(self, asn=None, policy=MaxLengthPolicy.EXACT, filters=None):
        """Run every candidate object file through reader, parser and
        extractor. Returns the list of extracted entries and the list of
        diagnostics for the files that were skipped."""
        entries = []
        diagnostics = []
        count = 0
        for path in self.list(diagnostics):
            count += 1
            try:
                obj = parse_object(read_record(path))
                entries.extend(route_entries(obj, asn=asn, policy=policy,
                                             filters=filters))
            except ReadError as err:
                diagnostic = Diagnostic(path, "Cannot read: {}".format(
                    err.reason))
            except ValidationError as err:
                diagnostic = Diagnostic(path, str(err))
            else:
                continue
            logger.warning(str(diagnostic))
            diagnostics.append(diagnostic)
        logger.info("Scanned {} object files in {}, {} entries, {} "
                    "skipped".format(count, self.root_dir, len(entries),
                                     len(diagnostics)))
        return entries, diagnostics

    def __repr__(self):
        return "<{}.{} {}>".format(
            type(self).__module__, type(self).__name__, self.root_dir)


def walk_registry(root_dir, asn=None, policy=MaxLengthPolicy.EXACT,
                  use_filter=False):
    """Open the registry at `root_dir` and extract its route entries.
    Raises RegistryError if the registry cannot be used at all."""
    registry = Registry(root_dir)
    filters = registry.load_filter() if use_filter else None
    return registry.walk(asn=asn, policy=policy, filters=filters)
