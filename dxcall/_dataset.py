#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
In-memory model of the ClubLog country file (cty.xml).

See https://clublog.freshdesk.com/support/solutions/articles/54902-downloading-the-prefixes-and-exceptions-as-xml

The file lists entities (DXCCs), prefixes, callsign exceptions, invalid
operations and CQ zone exceptions. Every prefix and exception names the
ADIF identifier of its entity, ADIF 0 is used for calls that count for no
entity at all (maritime mobile, aeronautical mobile, satellite).

Prefixes, exceptions, invalid operations and zone exceptions may be
limited to a validity window [start, end). Only records that are active
at the queried timestamp are returned by the lookups.

A Dataset is built once by the loader and never modified afterwards, so
it can be shared between threads without locking.
"""

import collections

from . import _time

ADIF_NO_DXCC = 0
CONTINENTS = ("AF", "AN", "AS", "EU", "NA", "OC", "SA")

class _Windowed:
    __slots__ = ()

    def is_active(self, timestamp):
        return _time.is_in_window(timestamp, self.start, self.end)

class Entity(_Windowed, collections.namedtuple("Entity",
        "adif name prefix continent cq_zone itu_zone latlon start end "
        "deleted whitelist whitelist_start whitelist_end")):
    __slots__ = ()

    def enforces_whitelist(self, timestamp):
        return self.whitelist and _time.is_in_window(
            timestamp, self.whitelist_start, self.whitelist_end)

    def __str__(self):
        return "entity({}, adif={}, prefix={}, cont={}, cq={}, itu={}, lat/lon={!s})".format(
            self.name, self.adif, self.prefix, self.continent, self.cq_zone,
            self.itu_zone, self.latlon)

class _Match(_Windowed):
    """Common behaviour of prefixes and callsign exceptions."""
    __slots__ = ()

    def is_special(self):
        return self.adif == ADIF_NO_DXCC

class Prefix(_Match, collections.namedtuple("Prefix",
        "record call adif name entity continent cq_zone itu_zone latlon "
        "start end whitelisted")):
    """
    A callsign prefix like DL or UA9. Compound prefixes like SV/A contain
    a slash; they are only matched while whitelisted is set.
    """
    __slots__ = ()

    def is_compound(self):
        return "/" in self.call

    def __str__(self):
        return "prefix({} -> {}, adif={})".format(self.call, self.name, self.adif)

class CallsignException(_Match, collections.namedtuple("CallsignException",
        "record call adif name entity continent cq_zone itu_zone latlon "
        "start end")):
    __slots__ = ()

    def __str__(self):
        return "exception({} -> {}, adif={})".format(self.call, self.name, self.adif)

class InvalidOperation(_Windowed, collections.namedtuple("InvalidOperation",
        "record call start end")):
    __slots__ = ()

class ZoneException(_Windowed, collections.namedtuple("ZoneException",
        "record call zone start end")):
    __slots__ = ()

def _by_call(records):
    result = collections.defaultdict(list)
    for record in records:
        result[record.call].append(record)
    return {call: tuple(group) for call, group in result.items()}

def _first_active(groups, call, timestamp):
    for record in groups.get(call, ()):
        if record.is_active(timestamp):
            return record
    return None

class Dataset:
    def __init__(self, entities, prefixes, exceptions,
                 invalid_operations=(), zone_exceptions=(), date=None):
        self.date = date
        self._entities = {entity.adif: entity for entity in entities}
        self._prefixes = _by_call(prefixes)
        self._exceptions = _by_call(exceptions)
        self._invalid_operations = _by_call(invalid_operations)
        self._zone_exceptions = _by_call(zone_exceptions)
        self.max_prefix_length = max(
            (len(call) for call in self._prefixes), default=0)

    def __str__(self):
        return ("dataset({}, {} entities, {} prefixes, {} exceptions, "
                "{} invalid operations, {} zone exceptions)").format(
            _time.z(self.date), len(self._entities),
            sum(len(g) for g in self._prefixes.values()),
            sum(len(g) for g in self._exceptions.values()),
            sum(len(g) for g in self._invalid_operations.values()),
            sum(len(g) for g in self._zone_exceptions.values()))

    def entities(self):
        return list(self._entities.values())

    def entity(self, adif, timestamp=None):
        entity = self._entities.get(adif)
        if entity is None:
            return None
        if timestamp is not None and not entity.is_active(timestamp):
            return None
        return entity

    def prefixes(self, call, timestamp):
        return [p for p in self._prefixes.get(call, ()) if p.is_active(timestamp)]

    def exception(self, call, timestamp):
        return _first_active(self._exceptions, call, timestamp)

    def zone_exception(self, call, timestamp):
        exception = _first_active(self._zone_exceptions, call, timestamp)
        return exception.zone if exception else None

    def is_invalid_operation(self, call, timestamp):
        return _first_active(self._invalid_operations, call, timestamp) is not None

    def check_whitelist(self, call, adif, timestamp):
        """
        True unless the entity enforces its whitelist at timestamp and the
        call is not approved for it by a callsign exception.
        """
        entity = self.entity(adif, timestamp)
        if entity is None or not entity.whitelist:
            return True
        exception = self.exception(call, timestamp)
        if exception is not None:
            return exception.adif == adif
        return not entity.enforces_whitelist(timestamp)
