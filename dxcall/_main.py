#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
dxcall CALL [CALL ...]

Print entity, ADIF identifier, continent, zones and coordinates of calls.
With --csv the calls are read from a file with the columns
CALL,ADIF,QSO_DATE,TIME_ON (ADIF field values, e.g. DL1ABC,230,20200101,1200)
and every call whose entity differs from the expected ADIF identifier
is reported, rows that cannot be read count as failures. --entities
lists the entities of the country file.
"""

import sys
import csv
import logging
import argparse
import datetime

from . import _config, _dxcc, _errors, _time

logger = logging.getLogger(__name__)

def _timestamp(text):
    try:
        return _time.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))

def _parser():
    parser = argparse.ArgumentParser(prog="dxcall",
        description="Look up the DXCC entity of callsigns in the ClubLog country file.")
    parser.add_argument("calls", nargs="*", metavar="CALL")
    parser.add_argument("-f", "--file", help="ClubLog cty.xml to use instead of the configured one")
    parser.add_argument("-t", "--time", type=_timestamp, default=None,
        help="analyze as of this ISO-8601 timestamp (default: now)")
    parser.add_argument("-c", "--config", help="configuration file")
    parser.add_argument("--download", action="store_true",
        help="download a fresh country file before the lookup")
    parser.add_argument("--csv", metavar="FILE", help="check the calls listed in FILE")
    parser.add_argument("--entities", action="store_true",
        help="list the entities of the country file")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser

def _log_level(config, verbose):
    if verbose > 1:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return getattr(logging, config.log_level, logging.WARNING)

def _csv_entry(row):
    if len(row) < 4:
        raise ValueError("expected CALL,ADIF,QSO_DATE,TIME_ON")
    call, adif, qso_date, time_on = (field.strip() for field in row[:4])
    timestamp = datetime.datetime.strptime(
        qso_date + time_on[:4], "%Y%m%d%H%M").replace(tzinfo=_time.UTC)
    return call, int(adif), timestamp

def read_csv(filename):
    """
    Returns the (call, adif, timestamp) entries and the (line number, text)
    of every row that could not be read.
    """
    entries = []
    rejected = []
    with open(filename, newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row or row[0].strip().upper() in ("", "CALL"):
                continue
            try:
                entries.append(_csv_entry(row))
            except ValueError as e:
                logger.warning("%s line %d: %s", filename, reader.line_num, e)
                rejected.append((reader.line_num, ",".join(row)))
    return entries, rejected

def print_call(dxcc, call, timestamp, location):
    try:
        result = dxcc.analyze(call, timestamp)
    except _errors.AnalysisError as e:
        print("{:<12} {}".format(call, e.reason), file=sys.stderr)
        return False
    print("{:<12} {}".format(call, result))
    if location and result.latlon:
        print("{:<12} {:.0f}km, {:.1f}°".format("", location.distance_to(result.latlon),
            location.bearing_to(result.latlon)))
    return True

def print_entities(dataset, timestamp):
    for entity in sorted(dataset.entities(), key=lambda e: e.adif):
        if timestamp is None or entity.is_active(timestamp):
            print("{:>3} {:<6} {}{}".format(entity.adif, entity.prefix or "",
                entity.name, " (deleted)" if entity.deleted else ""))

def check_csv(dxcc, filename):
    entries, rejected = read_csv(filename)
    for line, text in rejected:
        print("line {}: cannot read {!r}".format(line, text))
    failures = len(rejected)
    for call, adif, timestamp in entries:
        try:
            result = dxcc.analyze(call, timestamp)
        except _errors.AnalysisError as e:
            failures += 1
            print("{:<12} {} expected {}, {}".format(call, _time.z(timestamp), adif, e.reason))
            continue
        if result.adif != adif:
            failures += 1
            print("{:<12} {} expected {}, got {}".format(call, _time.z(timestamp), adif, result))
    total = len(entries) + len(rejected)
    print("{} of {} calls as expected".format(total - failures, total))
    return failures == 0

def main(args):
    options = _parser().parse_args(args[1:])
    config = _config.load_config(options.config)
    logging.basicConfig(level=_log_level(config, options.verbose),
        format="[%(levelname)s] %(name)s: %(message)s")

    dxcc = _dxcc.DXCC()
    try:
        if options.file:
            dxcc.load_from_file(options.file)
        else:
            if options.download:
                _dxcc.DXCC.download_cty_file(config.api_key, config.data_file, config.url)
            dxcc.load(config)
    except (_errors.DXCallError, OSError) as e:
        logger.error("cannot load country file: %s", e)
        return 2

    ok = True
    if options.entities:
        print_entities(dxcc.dataset, options.time)
    if options.csv:
        try:
            ok = check_csv(dxcc, options.csv)
        except OSError as e:
            logger.error("cannot read %s: %s", options.csv, e)
            ok = False
    for call in options.calls:
        ok = print_call(dxcc, call, options.time, config.location) and ok
    return 0 if ok else 1

def run():
    sys.exit(main(sys.argv))

if __name__ == "__main__": run()
