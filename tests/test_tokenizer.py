#! /usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import os
import unittest
sys.path.insert(0, os.path.abspath('..'))

import dxcall._tokenizer as _tokenizer

class TestShape(unittest.TestCase):
    def test_shapes(self):
        self.assertEqual(_tokenizer.shape_of(""), _tokenizer.SHAPE_EMPTY)
        self.assertEqual(_tokenizer.shape_of("9"), _tokenizer.SHAPE_DIGITS)
        self.assertEqual(_tokenizer.shape_of("QRP"), _tokenizer.SHAPE_LETTERS)
        self.assertEqual(_tokenizer.shape_of("3D2"), _tokenizer.SHAPE_NUMERAL_PREFIXED)
        self.assertEqual(_tokenizer.shape_of("4U1ITU"), _tokenizer.SHAPE_NUMERAL_PREFIXED)
        self.assertEqual(_tokenizer.shape_of("DL1ABC"), _tokenizer.SHAPE_ALPHANUMERIC)
        self.assertEqual(_tokenizer.shape_of("W1@AW"), _tokenizer.SHAPE_INVALID)
        self.assertEqual(_tokenizer.shape_of("dl1abc"), _tokenizer.SHAPE_INVALID)

class TestTokenize(unittest.TestCase):
    def test_single_part(self):
        tokens = _tokenizer.tokenize("dl1abc")
        self.assertEqual(len(tokens), 1)
        self.assertFalse(tokens.is_compound())
        self.assertEqual(tokens[0].text, "dl1abc")
        self.assertEqual(tokens[0].normalized, "DL1ABC")
        self.assertEqual(tokens.call, "DL1ABC")
        self.assertTrue(tokens.is_plausible())

    def test_surrounding_whitespace_is_ignored(self):
        self.assertEqual(_tokenizer.tokenize("  W1AW/p \n").call, "W1AW/P")

    def test_positions(self):
        tokens = _tokenizer.tokenize("SV2/W1AW/A")
        self.assertEqual([p.position for p in tokens], [0, 1, 2])
        self.assertEqual([str(p) for p in tokens], ["SV2", "W1AW", "A"])
        self.assertTrue(tokens[2].is_single_letter())
        self.assertFalse(tokens[0].is_single_letter())

    def test_single_digit(self):
        tokens = _tokenizer.tokenize("SV0ABC/9")
        self.assertTrue(tokens[1].is_single_digit())
        self.assertFalse(_tokenizer.tokenize("W1AW/73")[1].is_single_digit())

    def test_empty_parts(self):
        for raw in ("", "/W1AW", "W1AW/", "W1AW//P"):
            tokens = _tokenizer.tokenize(raw)
            self.assertFalse(tokens.is_well_formed(), raw)
            self.assertFalse(tokens.is_plausible(), raw)

    def test_invalid_characters(self):
        self.assertFalse(_tokenizer.tokenize("W1-AW").is_well_formed())

    def test_non_ascii_characters(self):
        for raw in ("\ufb01/W1AW", "DL1\u00c4BC", "W1AW/\u0440"):
            tokens = _tokenizer.tokenize(raw)
            self.assertFalse(tokens.is_well_formed(), raw)
        self.assertEqual(_tokenizer.tokenize("\ufb01")[0].shape, _tokenizer.SHAPE_INVALID)

    def test_too_many_parts(self):
        tokens = _tokenizer.tokenize("W1AW/P/AM/7")
        self.assertTrue(tokens.is_well_formed())
        self.assertFalse(tokens.is_plausible())
        self.assertTrue(_tokenizer.tokenize("W1AW/P/AM").is_plausible())

if __name__ == '__main__':
    unittest.main()
