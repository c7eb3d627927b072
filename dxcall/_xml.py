#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Turn the ClubLog cty.xml document into a flat sequence of element records.

<clublog date="2024-01-01T00:00:00+00:00">
  <entities><entity>...</entity></entities>
  <exceptions><exception record="1">...</exception></exceptions>
  <prefixes><prefix record="1">...</prefix></prefixes>
  <invalid_operations><invalid record="1">...</invalid></invalid_operations>
  <zone_exceptions><zone_exception record="1">...</zone_exception></zone_exceptions>
</clublog>

The records keep all field values as text, typing them is left to the loader.
"""

import gzip
import xml.dom.minidom as minidom
from xml.parsers.expat import ExpatError

from . import _errors

RECORD_CONTAINERS = {
    "entities": "entity",
    "exceptions": "exception",
    "prefixes": "prefix",
    "invalid_operations": "invalid",
    "zone_exceptions": "zone_exception",
}

class XMLDataElement:
    def __init__(self, dom_element):
        self.dom_element = dom_element

    @staticmethod
    def from_string(s):
        if isinstance(s, str):
            s = s.encode("utf-8")
        try:
            return XMLDataElement(minidom.parseString(s).documentElement)
        except ExpatError as e:
            raise _errors.MalformedDocument(str(e))

    @property
    def tag(self):
        return self.dom_element.localName or self.dom_element.tagName

    def attribute(self, name):
        if not self.dom_element.hasAttribute(name):
            return None
        return self.dom_element.getAttribute(name)

    def values(self, key):
        return ["".join(node.data for node in child.dom_element.childNodes
                        if node.nodeType in (node.TEXT_NODE, node.CDATA_SECTION_NODE))
                for child in self.children(key)]

    def get(self, key, default=None):
        values = self.values(key)
        return values[0] if values else default

    def children(self, name=None):
        for node in self.dom_element.childNodes:
            if node.nodeType != node.ELEMENT_NODE:
                continue
            child = XMLDataElement(node)
            if name is None or child.tag == name:
                yield child

    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"): raise AttributeError(name)
        return self.get(name)

    def __getitem__(self, key):
        return self.get(key)

    def __str__(self):
        return self.dom_element.toxml()

def records_from_string(s):
    root = XMLDataElement.from_string(s)
    if root.tag != "clublog":
        raise _errors.MalformedDocument("root element is <{}>".format(root.tag))
    records = [root]
    for container in root.children():
        tag = RECORD_CONTAINERS.get(container.tag)
        if tag:
            records.extend(container.children(tag))
    return records

def decompress(content):
    if content[:2] != b"\x1f\x8b":
        return content
    try:
        return gzip.decompress(content)
    except (OSError, EOFError) as e:
        raise _errors.MalformedDocument(str(e) or "truncated gzip data")

def read_file(filename):
    with open(filename, "rb") as f:
        return decompress(f.read())

def records_from_file(filename):
    return records_from_string(read_file(filename))
