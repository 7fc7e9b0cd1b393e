# coding: utf-8

import enum


class ValidationError(ValueError):
    """Raised for malformed registry objects. The object is skipped, the
    run continues."""


class ReadError(OSError):
    """Raised when an object file cannot be opened or decoded."""

    def __init__(self, path, reason):
        super().__init__("{path}: {reason}".format(path=path, reason=reason))
        self.path = path
        self.reason = reason


class ObjectKind(enum.Enum):
    """Kind of a registry object. The value is the name of the mandatory
    attribute that identifies the kind."""
    ROUTE = "route"
    ROUTE6 = "route6"
    OTHER = None

    @property
    def mandatory_key(self):
        return self.value

    @property
    def ip_version(self):
        if self is ObjectKind.ROUTE:
            return 4
        elif self is ObjectKind.ROUTE6:
            return 6


# Checked in order, the first present key decides the kind.
kind_precedence = [ObjectKind.ROUTE, ObjectKind.ROUTE6]


class Object(object):
    def __init__(self, data=None):
        self._data = []
        if data is not None:
            self.extend(data)

    @property
    def data(self):
        """List of key-value-tuples."""
        return self._data

    @property
    def kind(self):
        """Kind of this object, derived from its mandatory attributes."""
        present = [kind for kind in kind_precedence
                   if kind.mandatory_key in self]
        if len(present) > 1:
            raise ValidationError(
                "Ambiguous object: has both {} attributes".format(
                    " and ".join(repr(k.mandatory_key) for k in present)))
        if present:
            return present[0]
        return ObjectKind.OTHER

    @property
    def object_class(self):
        """Name of the first attribute of this object."""
        return self.data[0][0]

    @property
    def object_key(self):
        """Value of the first attribute of this object."""
        return self.data[0][1]

    def extend(self, ex):
        """Extend object with another object or list of pairs."""
        if isinstance(ex, str):
            ex = parse_lines(ex.splitlines())
        for key, value in ex:
            self.add(key, value)

    def __getitem__(self, key):
        if isinstance(key, str):
            try:
                return self.get(key)[0]
            except IndexError:
                raise KeyError(repr(key))
        elif isinstance(key, (int, slice)):
            return self.data[key]
        raise TypeError(
            "Expected key to be str or int, got {}".format(
                type(key)))

    def __contains__(self, key):
        return normalize_key(key) in set(self.keys())

    def __len__(self):
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def get(self, key):
        """Return a list of values for a given key."""
        key = normalize_key(key)
        return [v for k, v in self._data if k == key]

    def getfirst(self, key, default=None):
        """Returns the first occurence of a field with matching key. Supports
        the `default` keyword."""
        try:
            return self.get(key)[0]
        except IndexError:
            return default

    def add(self, key, value):
        """Append a new field. The key is normalized."""
        self._data.append((normalize_key(key), str(value)))

    def items(self):
        """Returns an iterator of key-value-tuples."""
        return iter(self.data)

    def keys(self):
        """Returns an iterator of field keys."""
        return (key for key, _ in self.items())

    def to_dict(self):
        """Returns a mapping from each key to its ordered list of values."""
        result = {}
        for key, value in self.items():
            result.setdefault(key, []).append(value)
        return result

    def __repr__(self):
        if not self.data:
            return "<{}.{} (empty)>".format(
                type(self).__module__, type(self).__name__)
        return "<{module_name}.{class_name} {object_class}: {object_key}>".format(
            module_name=type(self).__module__,
            class_name=type(self).__name__,
            object_class=self.object_class,
            object_key=self.object_key)

    def __eq__(self, other):
        if not isinstance(other, Object):
            return NotImplemented
        return self.data == other.data


def normalize_key(key):
    return key.strip().lower()


def parse_lines(lines):
    r'''Split the lines of a registry object into a list of (key, value)
    pairs. The format is the registry's attribute format: each line consists
    of key and value, separated by the first colon ':'. Both sides are
    stripped of surrounding whitespace.

    Lines which are empty or consist only of whitespace are skipped, as are
    lines starting with the comment marker '#'.

    A line beginning with a whitespace character or '+', or a line without
    any colon, continues the value of the previous attribute. Its stripped
    text is appended to that value with a single space in between; a
    continuation line with no text (a lone '+') leaves the value unchanged.
    Duplicate keys are kept in order of appearance.
    '''
    result = []
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")

        if not line.strip():
            continue
        if line.lstrip().startswith("#"):
            continue

        if line[0] in {" ", "\t", "+"} or ":" not in line:
            if line[0] == "+":
                line = line[1:]
            if not result:
                raise ValidationError(
                    "Syntax error in line {}: continuation without "
                    "preceding attribute".format(lineno))
            key, value = result.pop()
            value = " ".join(v for v in (value, line.strip()) if v)
            result.append((key, value))
            continue

        key, value = line.split(":", 1)
        key = key.strip()
        if not key:
            raise ValidationError(
                "Syntax error in line {}: missing attribute name".format(
                    lineno))
        result.append((key, value.strip()))

    return result


def read_record(path):
    """Read the object file at `path` and return its list of (key, value)
    pairs. Raises ReadError when the file cannot be opened or decoded."""
    try:
        with open(path, encoding="utf-8-sig") as fh:
            return parse_lines(fh)
    except (OSError, UnicodeDecodeError) as err:
        raise ReadError(path, err) from err


def parse_object(record):
    """Build an Object from a list of (key, value) pairs and check that its
    kind is unambiguous."""
    obj = Object(record)
    obj.kind  # raises ValidationError for ambiguous objects
    return obj
