# coding: utf-8

import calendar
import json

DEFAULT_EXPIRY = 7 * 24 * 60 * 60


def roa_metadata(count, generated, expiry=DEFAULT_EXPIRY):
    """Build the metadata block. `generated` is an aware datetime."""
    timestamp = calendar.timegm(generated.utctimetuple())
    return {
        "counts": count,
        "generated": timestamp,
        "valid": timestamp + expiry,
    }


def roa_document(entries, metadata=None):
    """Build the ROA table document from canonically ordered entries."""
    document = {}
    if metadata is not None:
        document["metadata"] = metadata
    document["roas"] = [entry.to_json() for entry in entries]
    return document


def roa_json(entries, metadata=None, indent=None):
    if indent is None:
        separators = (",", ":")
    else:
        separators = (",", ": ")
    return json.dumps(roa_document(entries, metadata), indent=indent,
                      separators=separators)


def bird_roa(entry, table=None):
    appendum = ""
    if table:
        appendum = " table {}".format(table)
    return "add roa {prefix} max {max} as {autnum}".format(
        prefix=str(entry.prefix),
        max=entry.max_length,
        autnum=entry.origin) + appendum


def bird_roa_table(entries, table=None, flush=False):
    lines = []
    if flush:
        if table:
            lines.append("flush roa table {}".format(table))
        else:
            lines.append("flush roa")
    lines.extend(bird_roa(entry, table=table) for entry in entries)
    return "".join(line + "\n" for line in lines)
