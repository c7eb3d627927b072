#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build a Dataset from the element records of a ClubLog cty.xml file.

A record exposes its element name as tag, its XML attributes through
attribute(name) and the texts of its child elements through
values(field). The loader is fail-fast: a single malformed or repeated
field, a duplicated entity or a reference to an unknown entity aborts
the whole load.
"""

import collections

from . import _dataset, _errors, _location, _time

CQ_ZONES = (1, 40)
ITU_ZONES = (1, 90)

_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")

class _Fields:
    """Typed access to the text fields of one record."""

    def __init__(self, record):
        self.record = record
        self.tag = record.tag
        self.id = record.attribute("record") or record.get("adif") or "?"

    def malformed(self, field, value, reason=None):
        return _errors.MalformedField(self.tag, self.id, field, value, reason)

    def text(self, field, required=False):
        values = self.record.values(field)
        if len(values) > 1:
            raise self.malformed(field, values, "given {} times".format(len(values)))
        value = values[0].strip() if values else None
        if not value:
            if required:
                raise self.malformed(field, value, "missing")
            return None
        return value

    def integer(self, field, limits=None, required=False, value=None):
        value = self.text(field, required) if value is None else value
        if value is None:
            return None
        try:
            result = int(value)
        except ValueError:
            raise self.malformed(field, value, "not an integer")
        if limits and not limits[0] <= result <= limits[1]:
            raise self.malformed(field, value, "not within {}..{}".format(*limits))
        return result

    def boolean(self, field):
        value = self.text(field)
        if value is None:
            return None
        if value.lower() in _TRUE:
            return True
        if value.lower() in _FALSE:
            return False
        raise self.malformed(field, value, "not a boolean")

    def timestamp(self, field, value=None):
        value = self.text(field) if value is None else value
        if value is None:
            return None
        try:
            return _time.parse(value)
        except ValueError:
            raise self.malformed(field, value, "not an ISO-8601 timestamp")

    def continent(self):
        value = self.text("cont")
        if value is not None and value.upper() not in _dataset.CONTINENTS:
            raise self.malformed("cont", value, "unknown continent")
        return value.upper() if value else None

    def latlon(self):
        lat = self.text("lat")
        lon = self.text("long")
        if lat is None and lon is None:
            return None
        if lat is None or lon is None:
            raise self.malformed("lat" if lat is None else "long", None, "missing")
        try:
            return _location.LatLon(float(lat), float(lon))
        except ValueError as e:
            raise self.malformed("lat/long", "{}/{}".format(lat, lon), str(e))

    def window(self):
        start = self.timestamp("start")
        end = self.timestamp("end")
        if start and end and end < start:
            raise self.malformed("end", self.text("end"), "before start")
        return start, end

def _call(fields):
    return fields.text("call", required=True).upper()

def _entity(record):
    fields = _Fields(record)
    adif = fields.integer("adif", required=True)
    if adif == _dataset.ADIF_NO_DXCC:
        raise fields.malformed("adif", adif, "reserved for calls without entity")
    start, end = fields.window()
    return _dataset.Entity(
        adif=adif,
        name=fields.text("name", required=True),
        prefix=fields.text("prefix"),
        continent=fields.continent(),
        cq_zone=fields.integer("cqz", CQ_ZONES),
        itu_zone=fields.integer("ituz", ITU_ZONES),
        latlon=fields.latlon(),
        start=start,
        end=end,
        deleted=bool(fields.boolean("deleted")),
        whitelist=bool(fields.boolean("whitelist")),
        whitelist_start=fields.timestamp("whitelist_start"),
        whitelist_end=fields.timestamp("whitelist_end"))

def _owner(fields, entities):
    adif = fields.integer("adif", required=True)
    if adif == _dataset.ADIF_NO_DXCC:
        return adif, None
    if adif not in entities:
        raise _errors.UnknownEntityReference(fields.tag, fields.id, adif)
    return adif, entities[adif]

def _match_fields(fields, entities):
    """Fields shared by prefixes and callsign exceptions."""
    adif, entity = _owner(fields, entities)
    start, end = fields.window()
    name = fields.text("entity") or (entity.name if entity else None)
    values = dict(
        record=fields.integer("record", value=fields.record.attribute("record")),
        call=_call(fields),
        adif=adif,
        name=name,
        entity=entity,
        continent=fields.continent(),
        cq_zone=fields.integer("cqz", CQ_ZONES),
        itu_zone=fields.integer("ituz", ITU_ZONES),
        latlon=fields.latlon(),
        start=start,
        end=end)
    if entity is not None:
        for key in ("continent", "cq_zone", "itu_zone", "latlon"):
            if values[key] is None:
                values[key] = getattr(entity, key)
    return values

def _prefix(record, entities):
    fields = _Fields(record)
    values = _match_fields(fields, entities)
    prefix = _dataset.Prefix(whitelisted=fields.boolean("whitelist"), **values)
    if prefix.whitelisted is None:
        prefix = prefix._replace(whitelisted=prefix.is_compound())
    return prefix

def _exception(record, entities):
    return _dataset.CallsignException(**_match_fields(_Fields(record), entities))

def _invalid_operation(record):
    fields = _Fields(record)
    start, end = fields.window()
    return _dataset.InvalidOperation(
        record=fields.integer("record", value=record.attribute("record")),
        call=_call(fields), start=start, end=end)

def _zone_exception(record):
    fields = _Fields(record)
    start, end = fields.window()
    return _dataset.ZoneException(
        record=fields.integer("record", value=record.attribute("record")),
        call=_call(fields),
        zone=fields.integer("zone", CQ_ZONES, required=True),
        start=start, end=end)

def load(records):
    date = None
    by_tag = collections.defaultdict(list)
    for record in records:
        if record.tag == "clublog":
            date = _Fields(record).timestamp("date", record.attribute("date"))
        else:
            by_tag[record.tag].append(record)

    entities = {}
    for record in by_tag["entity"]:
        entity = _entity(record)
        if entity.adif in entities:
            raise _errors.DuplicateEntity(entity.adif)
        entities[entity.adif] = entity

    return _dataset.Dataset(
        entities=entities.values(),
        prefixes=[_prefix(r, entities) for r in by_tag["prefix"]],
        exceptions=[_exception(r, entities) for r in by_tag["exception"]],
        invalid_operations=[_invalid_operation(r) for r in by_tag["invalid"]],
        zone_exceptions=[_zone_exception(r) for r in by_tag["zone_exception"]],
        date=date)
