#! /usr/bin/env python3
# -*- coding: utf-8 -*-

import sys
import os
import unittest
sys.path.insert(0, os.path.abspath('..'))

import dxcall._dataset as _dataset
import dxcall._time as _time

import sample_data
from sample_data import at

class TestWindow(unittest.TestCase):
    def test_open_window(self):
        self.assertTrue(_time.is_in_window(at("1900-01-01T00:00:00Z"), None, None))

    def test_start_is_inclusive(self):
        start = at("2000-01-01T00:00:00Z")
        self.assertTrue(_time.is_in_window(start, start, None))
        self.assertFalse(_time.is_in_window(at("1999-12-31T23:59:59Z"), start, None))

    def test_end_is_exclusive(self):
        end = at("2000-01-01T00:00:00Z")
        self.assertFalse(_time.is_in_window(end, None, end))
        self.assertTrue(_time.is_in_window(at("1999-12-31T23:59:59Z"), None, end))

class TestDataset(unittest.TestCase):
    def setUp(self):
        self.dataset = sample_data.sample_dataset()

    def test_str_counts_records(self):
        text = str(self.dataset)
        self.assertIn("{} entities".format(len(sample_data.ENTITIES)), text)
        self.assertIn("{} prefixes".format(len(sample_data.PREFIXES)), text)
        self.assertIn("1 invalid operations", text)

    def test_max_prefix_length(self):
        self.assertEqual(self.dataset.max_prefix_length, len("3D2/R"))

    def test_prefix_switches_entity_at_window_boundary(self):
        before = self.dataset.prefixes("Y2", at("1990-10-02T23:59:59Z"))
        after = self.dataset.prefixes("Y2", at("1990-10-03T00:00:00Z"))
        self.assertEqual([p.adif for p in before], [229])
        self.assertEqual([p.adif for p in after], [230])

    def test_unknown_prefix(self):
        self.assertEqual(self.dataset.prefixes("X5", at("2020-01-01T00:00:00Z")), [])

    def test_entity_window(self):
        self.assertIsNotNone(self.dataset.entity(229))
        self.assertIsNotNone(self.dataset.entity(229, at("1990-01-01T00:00:00Z")))
        self.assertIsNone(self.dataset.entity(229, at("1991-01-01T00:00:00Z")))
        self.assertIsNone(self.dataset.entity(999))

    def test_exception_window(self):
        self.assertIsNone(self.dataset.exception("KC6RJW", at("2001-12-31T23:59:59Z")))
        self.assertEqual(self.dataset.exception("KC6RJW", at("2002-01-01T00:00:00Z")).adif, 22)
        self.assertIsNone(self.dataset.exception("KC6RJW", at("2004-01-01T00:00:00Z")))

    def test_invalid_operation(self):
        self.assertTrue(self.dataset.is_invalid_operation("T88A", at("1995-07-15T00:00:00Z")))
        self.assertFalse(self.dataset.is_invalid_operation("T88A", at("1995-08-01T00:00:00Z")))
        self.assertFalse(self.dataset.is_invalid_operation("T88B", at("1995-07-15T00:00:00Z")))

    def test_zone_exception(self):
        self.assertEqual(self.dataset.zone_exception("KD6WW/VY0", at("2003-07-31T00:00:00Z")), 1)
        self.assertIsNone(self.dataset.zone_exception("KD6WW/VY0", at("2003-08-01T00:00:00Z")))

    def test_special_entity_flag(self):
        t = at("2020-01-01T00:00:00Z")
        self.assertTrue(self.dataset.exception("W1AW/STS50", t).is_special())
        self.assertFalse(self.dataset.prefixes("DL", t)[0].is_special())

class TestWhitelist(unittest.TestCase):
    def setUp(self):
        self.dataset = sample_data.sample_dataset()

    def test_enforcement_window(self):
        athos = self.dataset.entity(180)
        self.assertFalse(athos.enforces_whitelist(at("2007-12-31T00:00:00Z")))
        self.assertTrue(athos.enforces_whitelist(at("2008-01-01T00:00:00Z")))
        self.assertFalse(self.dataset.entity(230).enforces_whitelist(at("2020-01-01T00:00:00Z")))

    def test_approved_by_exception(self):
        self.assertTrue(self.dataset.check_whitelist("SV1DC/A", 180, at("2020-01-01T00:00:00Z")))

    def test_exception_not_yet_active(self):
        self.assertFalse(self.dataset.check_whitelist("SV1DC/A", 180, at("2009-01-01T00:00:00Z")))

    def test_not_listed(self):
        self.assertFalse(self.dataset.check_whitelist("SV1ABC/A", 180, at("2020-01-01T00:00:00Z")))

    def test_before_enforcement(self):
        self.assertTrue(self.dataset.check_whitelist("SV1ABC/A", 180, at("2005-01-01T00:00:00Z")))

    def test_entity_without_whitelist(self):
        self.assertTrue(self.dataset.check_whitelist("W1AW", 291, at("2020-01-01T00:00:00Z")))
        self.assertTrue(self.dataset.check_whitelist("SV1DC/A", 236, at("2020-01-01T00:00:00Z")))

    def test_unknown_entity(self):
        self.assertTrue(self.dataset.check_whitelist("W1AW", 999, at("2020-01-01T00:00:00Z")))

class TestModel(unittest.TestCase):
    def test_compound_prefix(self):
        prefix = sample_data.sample_dataset().prefixes("3D2/R", at("2020-01-01T00:00:00Z"))[0]
        self.assertTrue(prefix.is_compound())
        self.assertEqual(str(prefix), "prefix(3D2/R -> ROTUMA ISLAND, adif=460)")

    def test_empty_dataset(self):
        dataset = _dataset.Dataset([], [], [])
        self.assertEqual(dataset.max_prefix_length, 0)
        self.assertEqual(dataset.entities(), [])
        self.assertIsNone(dataset.date)

if __name__ == '__main__':
    unittest.main()
