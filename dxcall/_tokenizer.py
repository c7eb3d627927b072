#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Split a raw callsign into its slash separated parts.

Tokenizing never fails, every string gives a sequence of parts. Whether
the sequence makes sense as a callsign is judged by the analyzer, which
rejects anything that is not plausible: empty parts, characters other
than letters and digits, or more than three parts.
"""

import re
import collections

MAX_PARTS = 3

SHAPE_EMPTY = "empty"
SHAPE_DIGITS = "digits"
SHAPE_LETTERS = "letters"
SHAPE_NUMERAL_PREFIXED = "numeral-prefixed"
SHAPE_ALPHANUMERIC = "alphanumeric"
SHAPE_INVALID = "invalid"

PART_EXPRESSION = re.compile(r'^[A-Z0-9]+$')
NUMERAL_PREFIXED_EXPRESSION = re.compile(r'^[0-9]+[A-Z][A-Z0-9]*$')

def shape_of(text):
    if text == "":
        return SHAPE_EMPTY
    if not PART_EXPRESSION.match(text):
        return SHAPE_INVALID
    if text.isdigit():
        return SHAPE_DIGITS
    if text.isalpha():
        return SHAPE_LETTERS
    if NUMERAL_PREFIXED_EXPRESSION.match(text):
        return SHAPE_NUMERAL_PREFIXED
    return SHAPE_ALPHANUMERIC

class Part(collections.namedtuple("Part", "text normalized position shape")):
    __slots__ = ()

    def is_single_digit(self):
        return self.shape == SHAPE_DIGITS and len(self.normalized) == 1

    def is_single_letter(self):
        return self.shape == SHAPE_LETTERS and len(self.normalized) == 1

    def __str__(self):
        return self.normalized

class Tokenization:
    def __init__(self, raw, parts):
        self.raw = raw
        self.parts = tuple(parts)
        self.call = "/".join(part.normalized for part in self.parts)

    def __repr__(self):
        return "Tokenization({!r})".format(self.raw)

    def __len__(self):
        return len(self.parts)

    def __iter__(self):
        return iter(self.parts)

    def __getitem__(self, index):
        return self.parts[index]

    def is_compound(self):
        return len(self.parts) > 1

    def is_well_formed(self):
        return all(part.shape not in (SHAPE_EMPTY, SHAPE_INVALID) for part in self.parts)

    def is_plausible(self):
        return self.is_well_formed() and 1 <= len(self.parts) <= MAX_PARTS

def tokenize(raw):
    text = raw.strip()
    parts = []
    for position, literal in enumerate(text.split("/")):
        normalized = literal.upper()
        # upper() maps some non-ASCII letters to ASCII (U+FB01 to FI)
        shape = shape_of(normalized) if literal.isascii() else SHAPE_INVALID
        parts.append(Part(literal, normalized, position, shape))
    return Tokenization(raw, parts)
