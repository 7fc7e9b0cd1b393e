# coding: utf-8

import argparse
import datetime
import logging
import os
import os.path
import sys
import tempfile

import dateutil.parser

import dn42roa.generators.roa
from dn42roa.config import DEFAULT_ASN, ConfigError, load_config, output_formats
from dn42roa.registry import RegistryError, walk_registry
from dn42roa.roa import MaxLengthPolicy, aggregate

logger = logging.getLogger(__name__)

OUTPUT_PERMISSIONS = 0o644


def parse_timestamp(value):
    try:
        timestamp = dateutil.parser.parse(value)
    except (ValueError, OverflowError) as err:
        raise argparse.ArgumentTypeError(
            "invalid timestamp {!r}: {}".format(value, err))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=datetime.timezone.utc)
    return timestamp


def build_argparser():
    argparser = argparse.ArgumentParser(
        description="Generate a ROA table from the route objects of a "
        "registry")
    argparser.add_argument("registry", help="Path to registry")
    argparser.add_argument("output",
                           help="Path to output file, '-' for stdout")
    argparser.add_argument("--config", "-c",
                           help="Path to configuration file")
    argparser.add_argument("--asn", "-a",
                           help="Origin AS in scope (default: AS{})".format(
                               DEFAULT_ASN))
    argparser.add_argument("--all-origins", "-A", action="store_const",
                           const=True,
                           help="Include route objects of every origin AS")
    argparser.add_argument("--max-length", "-m", dest="max_length",
                           choices=[p.value for p in MaxLengthPolicy],
                           help="How to derive max-length (default: exact)")
    argparser.add_argument("--weak-maxlen", "-M", dest="max_length",
                           action="store_const",
                           const=MaxLengthPolicy.WEAK.value,
                           help="Do not enforce strict maximum lengths")
    argparser.add_argument("--filter", "-f", action="store_const",
                           const=True,
                           help="Apply the registry prefix filter")
    argparser.add_argument("--metadata", action="store_const", const=True,
                           help="Add a metadata block to the document")
    argparser.add_argument("--generated", type=parse_timestamp,
                           help="Generation time in metadata (default: now)")
    argparser.add_argument("--expiry", type=int,
                           help="Validity of the document in seconds")
    argparser.add_argument("--format", "-F", dest="format",
                           choices=sorted(output_formats),
                           help="Output format (default: json)")
    argparser.add_argument("--indent", type=int,
                           help="Indentation of the JSON document")
    argparser.add_argument("--table", "-t",
                           help="Destination table for BIRD output")
    argparser.add_argument("--flush", action="store_const", const=True,
                           help="Flush BIRD table before adding entries")
    argparser.add_argument("--verbose", "-v", action="store_true",
                           help="Log debug messages")
    argparser.add_argument("--quiet", "-q", action="store_true",
                           help="Log errors only")
    return argparser


def config_overrides(args):
    return {
        "asn": args.asn,
        "all-origins": args.all_origins,
        "max-length": args.max_length,
        "filter": args.filter,
        "metadata": args.metadata,
        "expiry": args.expiry,
        "format": args.format,
        "indent": args.indent,
        "table": args.table,
        "flush": args.flush,
    }


def generate(registry, config, generated=None):
    """Convert the registry at `registry` into the output document. Returns
    the document text and the list of diagnostics."""
    asn = None if config["all-origins"] else config["asn"]
    entries, diagnostics = walk_registry(registry, asn=asn,
                                         policy=config["max-length"],
                                         use_filter=config["filter"])
    entries = aggregate(entries)

    if config["format"] == "bird":
        text = dn42roa.generators.roa.bird_roa_table(
            entries, table=config["table"], flush=config["flush"])
        return text, diagnostics

    metadata = None
    if config["metadata"]:
        if generated is None:
            generated = datetime.datetime.now(datetime.timezone.utc)
        metadata = dn42roa.generators.roa.roa_metadata(
            len(entries), generated, expiry=config["expiry"])
    text = dn42roa.generators.roa.roa_json(entries, metadata=metadata,
                                           indent=config["indent"])
    return text, diagnostics


def write_output(path, text):
    """Write `text` to `path`, replacing any previous file only once the
    new content is completely written."""
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    directory = os.path.dirname(os.path.abspath(path))
    tmpfile = tempfile.NamedTemporaryFile("w", encoding="utf-8",
                                          dir=directory, prefix=".roa-",
                                          suffix=".tmp", delete=False)
    try:
        with tmpfile as fh:
            fh.write(text)
        os.chmod(tmpfile.name, OUTPUT_PERMISSIONS)
        os.replace(tmpfile.name, path)
    except BaseException:
        os.unlink(tmpfile.name)
        raise


def main(argv=None):
    argparser = build_argparser()
    args = argparser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s: %(message)s")

    try:
        config = load_config(args.config, config_overrides(args))
        text, diagnostics = generate(args.registry, config,
                                     generated=args.generated)
        write_output(args.output, text)
    except (ConfigError, RegistryError) as err:
        logger.error(str(err))
        return 1
    except OSError as err:
        logger.error("Cannot write {}: {}".format(args.output, err))
        return 1

    if diagnostics:
        logger.warning("Skipped {} malformed objects".format(len(diagnostics)))
    logger.info("Wrote ROA table to {}".format(args.output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
