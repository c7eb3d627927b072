#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
timestamps as timezone aware UTC datetimes

ClubLog writes timestamps as ISO-8601, e.g. 1990-10-02T23:59:59+00:00
"""

import datetime

UTC = datetime.timezone.utc

def now():
    return datetime.datetime.now(UTC)

def as_utc(timestamp):
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC)

def parse(text):
    text = text.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.datetime.fromisoformat(text))
    except ValueError:
        raise ValueError("{} is not a valid timestamp.".format(text))

def is_in_window(timestamp, start, end):
    if start is not None and timestamp < start:
        return False
    if end is not None and timestamp >= end:
        return False
    return True

def z(timestamp):
    if timestamp is None:
        return "-"
    return as_utc(timestamp).strftime("%Y-%m-%d %H:%Mz")
