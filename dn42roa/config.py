# coding: utf-8

import json

from dn42roa.nic import parse_asn
from dn42roa.object import ValidationError
from dn42roa.roa import MaxLengthPolicy

DEFAULT_ASN = 4242420625

DEFAULT_CONFIG = {
    "asn": DEFAULT_ASN,
    "all-origins": False,
    "max-length": MaxLengthPolicy.EXACT.value,
    "filter": False,
    "metadata": False,
    "expiry": 7 * 24 * 60 * 60,
    "format": "json",
    "indent": None,
    "table": None,
    "flush": False,
}

output_formats = {"json", "bird"}


class ConfigError(ValueError):
    pass


def _check_type(key, value, types):
    if isinstance(value, bool) and bool not in types:
        raise ConfigError("Invalid value for {!r}: {!r}".format(key, value))
    if not isinstance(value, types):
        raise ConfigError("Invalid value for {!r}: {!r}".format(key, value))


def validate_config(config):
    """Check and normalize a configuration mapping in place. The AS number
    is converted to int and the max-length policy to MaxLengthPolicy."""
    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigError("Unknown configuration keys: {}".format(
            ", ".join(sorted(unknown))))

    try:
        config["asn"] = parse_asn(config["asn"], permit_plain=True)
    except (ValidationError, AttributeError) as err:
        raise ConfigError("Invalid value for 'asn': {}".format(err))
    try:
        config["max-length"] = MaxLengthPolicy(config["max-length"])
    except ValueError:
        raise ConfigError("Invalid value for 'max-length': {!r}".format(
            config["max-length"]))
    if config["format"] not in output_formats:
        raise ConfigError("Invalid value for 'format': {!r}".format(
            config["format"]))

    for key in ("all-origins", "filter", "metadata", "flush"):
        _check_type(key, config[key], (bool,))
    _check_type("expiry", config["expiry"], (int,))
    if config["expiry"] < 0:
        raise ConfigError("Invalid value for 'expiry': {!r}".format(
            config["expiry"]))
    if config["indent"] is not None:
        _check_type("indent", config["indent"], (int,))
    if config["table"] is not None:
        _check_type("table", config["table"], (str,))
    return config


def load_config(path=None, overrides=None):
    """Build the effective configuration: defaults, updated by the JSON
    file at `path`, updated by `overrides`. Entries of `overrides` which
    are None are ignored."""
    config = dict(DEFAULT_CONFIG)
    if path is not None:
        try:
            with open(path) as fh:
                file_config = json.load(fh)
        except OSError as err:
            raise ConfigError("Cannot read configuration file {}: {}".format(
                path, err))
        except ValueError as err:
            raise ConfigError("Invalid configuration file {}: {}".format(
                path, err))
        if not isinstance(file_config, dict):
            raise ConfigError(
                "Invalid configuration file {}: expected an object".format(
                    path))
        config.update(file_config)
    if overrides:
        config.update((k, v) for k, v in overrides.items() if v is not None)
    return validate_config(config)
