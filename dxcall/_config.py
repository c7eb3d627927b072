#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings of dxcall, stored as INI file in ~/.config/dxcall/config.ini

[clublog]
api_key=...
url=https://cdn.clublog.org/cty.php
data_file=~/.config/dxcall/cty.xml

[station]
latitude=51.05
longitude=13.74

[logging]
level=WARNING
"""

import os
import sys

from PySide6 import QtCore

from . import _location

CONFIG_DIR = "~/.config/dxcall/"
DEFAULT_URL = "https://cdn.clublog.org/cty.php"
DEFAULT_LOG_LEVEL = "WARNING"

def make_config_dir():
    path = os.path.expanduser(CONFIG_DIR)
    if not os.path.exists(path):
        os.makedirs(path)
    return path

def filename(name):
    return os.path.join(make_config_dir(), name)

def _float_or_none(value):
    if value is None or str(value).strip() == "":
        return None
    return float(value)

class Config:
    def __init__(self, config_filename=None):
        self.filename = config_filename or filename("config.ini")
        self.settings = QtCore.QSettings(self.filename, QtCore.QSettings.Format.IniFormat)
        self.settings.beginGroup("clublog")
        self.api_key = str(self.settings.value("api_key", ""))
        self.url = str(self.settings.value("url", DEFAULT_URL))
        self.data_file = os.path.expanduser(str(self.settings.value(
            "data_file", os.path.join(os.path.dirname(self.filename), "cty.xml"))))
        self.settings.endGroup()
        self.location = self.get_location()
        self.log_level = str(self.settings.value("logging/level", DEFAULT_LOG_LEVEL)).upper()

    def get_location(self):
        self.settings.beginGroup("station")
        lat = _float_or_none(self.settings.value("latitude", None))
        lon = _float_or_none(self.settings.value("longitude", None))
        self.settings.endGroup()
        if lat is None or lon is None:
            return None
        return _location.LatLon(lat, lon)

    def is_empty(self):
        return len(self.settings.allKeys()) == 0

    def write_default_values(self):
        self.settings.beginGroup("clublog")
        self.settings.setValue("api_key", self.api_key)
        self.settings.setValue("url", self.url)
        self.settings.setValue("data_file", self.data_file)
        self.settings.endGroup()
        self.settings.beginGroup("station")
        self.settings.setValue("latitude", "" if self.location is None else self.location.lat)
        self.settings.setValue("longitude", "" if self.location is None else self.location.lon)
        self.settings.endGroup()
        self.settings.setValue("logging/level", self.log_level)
        self.settings.sync()

def load_config(config_filename=None):
    if config_filename is None:
        make_config_dir()
    config = Config(config_filename)
    if not os.path.isfile(config.filename):
        config.write_default_values()
    return config

def main(args):
    config = load_config(args[1] if len(args) > 1 else None)
    print("config:    {}".format(config.filename))
    print("data file: {}".format(config.data_file))
    print("url:       {}".format(config.url))
    print("location:  {}".format(config.location))
    print("log level: {}".format(config.log_level))

if __name__ == "__main__": main(sys.argv)
