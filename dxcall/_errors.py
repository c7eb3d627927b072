#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised by dxcall.

Load errors are fatal for the dataset being built, analysis errors only
concern the single call that was analyzed.
"""

class DXCallError(Exception):
    pass

class NotLoaded(DXCallError):
    def __init__(self):
        DXCallError.__init__(self, "no ClubLog dataset loaded")

class DownloadError(DXCallError):
    def __init__(self, url, status_code):
        DXCallError.__init__(self,
            "download of {} failed with status {}".format(url, status_code))
        self.url = url
        self.status_code = status_code

class LoadError(DXCallError):
    pass

class UnknownEntityReference(LoadError):
    def __init__(self, tag, record, adif):
        LoadError.__init__(self,
            "{} {} references unknown entity {}".format(tag, record, adif))
        self.tag = tag
        self.record = record
        self.adif = adif

class DuplicateEntity(LoadError):
    def __init__(self, adif):
        LoadError.__init__(self, "entity {} is defined twice".format(adif))
        self.adif = adif

class MalformedDocument(LoadError):
    def __init__(self, reason):
        LoadError.__init__(self, "not a ClubLog country file: {}".format(reason))
        self.reason = reason

class MalformedField(LoadError):
    def __init__(self, tag, record, field, value, reason=None):
        message = "{} {}: malformed {} {!r}".format(tag, record, field, value)
        if reason:
            message += " ({})".format(reason)
        LoadError.__init__(self, message)
        self.tag = tag
        self.record = record
        self.field = field
        self.value = value

class AnalysisError(DXCallError):
    def __init__(self, call, message):
        DXCallError.__init__(self, "{}: {}".format(call, message))
        self.call = call
        self.reason = message

class NoMatch(AnalysisError):
    def __init__(self, call, message="no active prefix or exception matches"):
        AnalysisError.__init__(self, call, message)

class Ambiguous(AnalysisError):
    def __init__(self, call, candidates):
        AnalysisError.__init__(self, call, "ambiguous between {}".format(
            ", ".join(str(c) for c in candidates)))
        self.candidates = list(candidates)

class StructurallyInvalid(AnalysisError):
    pass

class InvalidOperation(AnalysisError):
    def __init__(self, call):
        AnalysisError.__init__(self, call, "listed as invalid operation")
