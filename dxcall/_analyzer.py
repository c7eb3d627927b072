#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Analyze a callsign to get its entity, ADIF identifier, continent, zones
and coordinates from a ClubLog dataset.

The analyzer holds no state besides the dataset it was created for, the
result only depends on the call, the timestamp and that dataset.
"""

import collections

from . import _dataset, _errors, _resolver, _time, _tokenizer

class AnalysisResult(collections.namedtuple("AnalysisResult",
        "call matched adif name continent cq_zone itu_zone latlon entity special")):
    """
    matched is the literal prefix or exception that decided the entity,
    special names the kind of call for results without entity
    (e.g. MARITIME MOBILE), in which case adif is 0.
    """
    __slots__ = ()

    def is_special_entity(self):
        return self.adif == _dataset.ADIF_NO_DXCC

    def __str__(self):
        if self.is_special_entity():
            return "{} ({}, matched={})".format(self.special, self.adif, self.matched)
        return "{} ({}, matched={}, cont={}, cq={}, itu={}, lat/lon={!s})".format(
            self.name, self.adif, self.matched, self.continent, self.cq_zone,
            self.itu_zone, self.latlon)

def _special_result(call, matched, special):
    return AnalysisResult(call=call, matched=matched, adif=_dataset.ADIF_NO_DXCC,
        name=None, continent=None, cq_zone=None, itu_zone=None, latlon=None,
        entity=None, special=special)

class Analyzer:
    def __init__(self, dataset):
        self.dataset = dataset
        self.resolver = _resolver.Resolver(dataset)

    def analyze(self, raw, at=None):
        at = _time.now() if at is None else _time.as_utc(at)
        tokens = _tokenizer.tokenize(raw)
        call = tokens.call
        if not tokens.is_well_formed():
            raise _errors.StructurallyInvalid(call,
                "only letters and digits separated by single slashes are allowed")
        if not tokens.is_plausible():
            raise _errors.StructurallyInvalid(call,
                "more than {} parts".format(_tokenizer.MAX_PARTS))
        if self.dataset.is_invalid_operation(call, at):
            raise _errors.InvalidOperation(call)

        resolution = self.resolver.resolve(tokens, at)
        match = resolution.winner.match
        if match.is_special():
            return _special_result(call, match.call, match.name)
        if resolution.special:
            return _special_result(call, match.call, resolution.special)

        cq_zone = match.cq_zone
        if resolution.winner.kind != _resolver.KIND_EXCEPTION:
            cq_zone = self.dataset.zone_exception(call, at) or cq_zone
        return AnalysisResult(call=call, matched=match.call, adif=match.adif,
            name=match.entity.name, continent=match.continent, cq_zone=cq_zone,
            itu_zone=match.itu_zone, latlon=match.latlon, entity=match.entity,
            special=None)

    def check_whitelist(self, call, adif, at=None):
        at = _time.now() if at is None else _time.as_utc(at)
        return self.dataset.check_whitelist(_tokenizer.tokenize(call).call, adif, at)
