#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Find the prefix or callsign exception that decides the entity of a call.

For every part of a call the resolver looks for prefixes the part starts
with, shortening the part char by char from the back so that the longest
(most specific) prefix wins, e.g. UA9ABC is UA9 and not U. Candidates are
ranked in this order:

1. a callsign exception for the complete call
2. a whitelisted compound prefix, spelled out by two parts (SV/A) or
   built from a part and a single letter appendix (3D2AB/R tries 3D2/R
   before 3D2 and R)
3. the highest share of the part covered by its prefix: F0BAU/FC is FC
   (2 of 2 chars) and not F (1 of 5 chars)
4. the fewest chars removed from the part

An approved compound match decides the call on its own, the parts it
was built from are not resolved against each other.

Candidates that still tie but belong to different entities make the call
ambiguous. Secondary indicators like /P or /MM in any but the first
position never decide the entity. At most two parts may carry a prefix,
three independently valid prefixes are rejected.

Known limitation: appendices that happen to be a prefix as well win over
the home call, LS4AA/F gives France although it is an Argentinian
special appendix.
"""

import re
import collections

from . import _errors

MARITIME_MOBILE = "MARITIME MOBILE"
AERONAUTICAL_MOBILE = "AERONAUTICAL MOBILE"
SATELLITE = "SATELLITE, INTERNET OR REPEATER"

NO_ENTITY_INDICATORS = {
    "MM": MARITIME_MOBILE,
    "AM": AERONAUTICAL_MOBILE,
    "SAT": SATELLITE,
}
SECONDARY_INDICATORS = ("P", "M", "A", "QRP", "LH") + tuple(NO_ENTITY_INDICATORS)

MAX_PREFIX_PARTS = 2

KIND_EXCEPTION = "exception"
KIND_JOINED = "joined"
KIND_COMPOUND = "compound"
KIND_PREFIX = "prefix"

HOMECALL_DIGIT_EXPRESSION = re.compile(r'^([A-Z0-9]+)(\d)([A-Z0-9]+)$')

class Candidate(collections.namedtuple("Candidate",
        "match part span confidence removed kind")):
    """
    A prefix or exception matching (part of) a call.

    part is the position of the matched part (None for exceptions, which
    match the complete call), span the matched (start, end) within it.
    """
    __slots__ = ()

    @property
    def entity(self):
        return self.match.entity

    @property
    def adif(self):
        return self.match.adif

    def score(self):
        if self.kind == KIND_EXCEPTION:
            return (0,)
        if self.kind in (KIND_JOINED, KIND_COMPOUND):
            return (1, -self.confidence, self.removed)
        return (2, -self.confidence, self.removed)

    def rank(self):
        return self.score() + (-1 if self.part is None else self.part,)

    def __str__(self):
        return "{} ({}, adif={})".format(self.match.call, self.match.name, self.adif)

class Resolution(collections.namedtuple("Resolution", "winner candidates special")):
    """
    The winning candidate, all candidates it was chosen from (best first)
    and the name of a no-entity indicator like /MM, if present.
    """
    __slots__ = ()

def _ranked(candidates):
    return sorted(candidates, key=Candidate.rank)

class Resolver:
    def __init__(self, dataset):
        self.dataset = dataset

    def _approved(self, prefix, call, timestamp):
        return self.dataset.check_whitelist(call, prefix.adif, timestamp)

    def exception_candidate(self, tokens, timestamp):
        exception = self.dataset.exception(tokens.call, timestamp)
        if exception is None:
            return None
        return Candidate(exception, None, (0, len(tokens.call)), 1.0, 0, KIND_EXCEPTION)

    def joined_candidates(self, tokens, timestamp):
        result = []
        for first, second in zip(tokens.parts, tokens.parts[1:]):
            joined = first.normalized + "/" + second.normalized
            for prefix in self.dataset.prefixes(joined, timestamp):
                if prefix.whitelisted and self._approved(prefix, tokens.call, timestamp):
                    result.append(Candidate(prefix, first.position,
                        (0, len(first.normalized)), 1.0, 0, KIND_JOINED))
        return _ranked(result)

    def _matches(self, tokens, part, timestamp, text):
        """(length, kind, prefix) for every prefix the text begins with, longest first."""
        appendices = [p.normalized for p in tokens.parts
                      if p.position > part.position and p.is_single_letter()]
        for length in range(min(len(text), self.dataset.max_prefix_length), 0, -1):
            head = text[:length]
            for appendix in appendices:
                for prefix in self.dataset.prefixes(head + "/" + appendix, timestamp):
                    if prefix.whitelisted and self._approved(prefix, tokens.call, timestamp):
                        yield length, KIND_COMPOUND, prefix
            for prefix in self.dataset.prefixes(head, timestamp):
                yield length, KIND_PREFIX, prefix

    def _longest_per_entity(self, part, text, matches):
        best = {}
        for length, kind, prefix in matches:
            if prefix.adif not in best:
                best[prefix.adif] = Candidate(prefix, part.position, (0, length),
                    length / len(text), len(text) - length, kind)
        return _ranked(best.values())

    def part_candidates(self, tokens, part, timestamp, text=None):
        """
        Prefixes the part (or text standing in for it) begins with, the
        longest one per entity, best first.
        """
        text = part.normalized if text is None else text
        return self._longest_per_entity(part, text,
            self._matches(tokens, part, timestamp, text))

    def compound_candidates(self, tokens, timestamp):
        """Approved compound prefixes built from a part and a single letter appendix."""
        result = []
        for part in tokens.parts:
            if self._is_indicator(part):
                continue
            result.extend(self._longest_per_entity(part, part.normalized,
                (m for m in self._matches(tokens, part, timestamp, part.normalized)
                 if m[1] == KIND_COMPOUND)))
        return _ranked(result)

    def resolve_candidates(self, tokens, timestamp):
        """All candidates for the call, best first."""
        result = []
        exception = self.exception_candidate(tokens, timestamp)
        if exception:
            result.append(exception)
        result.extend(self.joined_candidates(tokens, timestamp))
        for part in tokens.parts:
            if not self._is_indicator(part):
                result.extend(self.part_candidates(tokens, part, timestamp))
        return _ranked(result)

    def resolve(self, tokens, timestamp):
        exception = self.exception_candidate(tokens, timestamp)
        if exception:
            return Resolution(exception, [exception], None)

        special = self._no_entity_indicator(tokens)

        joined = self.joined_candidates(tokens, timestamp)
        if joined:
            return Resolution(self._pick(tokens, joined), joined, special)

        compound = self.compound_candidates(tokens, timestamp)
        if compound:
            return Resolution(self._pick(tokens, compound), compound, special)

        bearing = []
        others = []
        for part in tokens.parts:
            if self._is_indicator(part):
                others.append(part)
                continue
            candidates = self.part_candidates(tokens, part, timestamp)
            if not candidates:
                if part.position == 0:
                    raise _errors.NoMatch(tokens.call, "does not begin with a valid prefix")
                others.append(part)
                continue
            if others:
                raise _errors.StructurallyInvalid(tokens.call,
                    "prefix {} follows an appendix".format(part))
            bearing.append((part, candidates))
            if len(bearing) > MAX_PREFIX_PARTS:
                raise _errors.StructurallyInvalid(tokens.call,
                    "more than {} parts carry a prefix".format(MAX_PREFIX_PARTS))

        if len(bearing) == 1:
            part, candidates = bearing[0]
            moved = self._single_digit_candidates(tokens, part, others, timestamp)
            if moved:
                candidates = moved
            return Resolution(self._pick(tokens, candidates), candidates, special)

        candidates = _ranked(bearing[0][1] + bearing[1][1])
        return Resolution(self._pick(tokens, candidates), candidates, special)

    def _pick(self, tokens, candidates):
        winner = candidates[0]
        tied = [c for c in candidates if c.score() == winner.score()]
        if len(set(c.adif for c in tied)) > 1:
            raise _errors.Ambiguous(tokens.call, tied)
        return winner

    def _is_indicator(self, part):
        return part.position > 0 and part.normalized in SECONDARY_INDICATORS

    def _no_entity_indicator(self, tokens):
        found = [part for part in tokens.parts
                 if part.position > 0 and part.normalized in NO_ENTITY_INDICATORS]
        if len(found) > 1:
            raise _errors.StructurallyInvalid(tokens.call,
                "multiple appendices without entity: {}".format(
                    ", ".join(str(part) for part in found)))
        return NO_ENTITY_INDICATORS[found[0].normalized] if found else None

    def _single_digit_candidates(self, tokens, part, others, timestamp):
        """
        A single digit appendix may move the call to a different prefix,
        SV0ABC/9 is SV9 (Crete) and not SV (Greece).
        """
        digits = [p for p in others if p.is_single_digit()]
        if not digits:
            return None
        if len(digits) > 1:
            raise _errors.StructurallyInvalid(tokens.call, "multiple single digit appendices")
        match = HOMECALL_DIGIT_EXPRESSION.match(part.normalized)
        if not match:
            return None
        moved = match.group(1) + digits[0].normalized + match.group(3)
        return self.part_candidates(tokens, part, timestamp, moved)
