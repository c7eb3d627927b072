#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Load the ClubLog country file and answer entity queries for calls.

The file is available from https://cdn.clublog.org/cty.php?api=APIKEY as
gzip compressed XML, an API key can be requested at
https://clublog.freshdesk.com/support/solutions/articles/54910-api-keys

A newer file can be loaded at any time. The new dataset is built off to
the side and replaces the current one in a single assignment, queries
running meanwhile keep using the dataset they started with.
"""

import os
import logging
import threading

import requests

from . import _analyzer, _config, _errors, _loader, _xml

logger = logging.getLogger(__name__)

CTY_URL = "https://cdn.clublog.org/cty.php"
DOWNLOAD_TIMEOUT = 60 # seconds

class DXCC:
    def __init__(self):
        self.analyzer = None
        self._load_lock = threading.Lock()

    @property
    def dataset(self):
        analyzer = self.analyzer
        return analyzer.dataset if analyzer else None

    def _swap(self, records):
        with self._load_lock:
            analyzer = _analyzer.Analyzer(_loader.load(records))
            self.analyzer = analyzer
        logger.info("loaded %s", analyzer.dataset)
        return analyzer.dataset

    def load_from_string(self, text):
        return self._swap(_xml.records_from_string(text))

    def load_from_file(self, filename):
        logger.debug("loading %s", filename)
        try:
            return self._swap(_xml.records_from_file(filename))
        except _errors.LoadError:
            logger.error("%s is not a usable country file", filename)
            raise

    @staticmethod
    def download_cty_file(api_key, filename, url=CTY_URL):
        logger.info("downloading country file from %s", url)
        response = requests.get(url, params={"api": api_key}, timeout=DOWNLOAD_TIMEOUT)
        if response.status_code != 200:
            logger.error("download failed: %s %s", response.status_code, response.text[:200])
            raise _errors.DownloadError(url, response.status_code)
        try:
            content = _xml.decompress(response.content)
            _xml.records_from_string(content)
        except _errors.MalformedDocument:
            logger.error("download from %s is not a usable country file", url)
            raise
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        partial = filename + ".part"
        with open(partial, "wb") as f:
            f.write(content)
        os.replace(partial, filename)
        logger.info("stored country file as %s", filename)
        return filename

    def load(self, config=None):
        config = config or _config.load_config()
        if not os.path.isfile(config.data_file):
            DXCC.download_cty_file(config.api_key, config.data_file, config.url)
        return self.load_from_file(config.data_file)

    def _current(self):
        analyzer = self.analyzer
        if analyzer is None:
            raise _errors.NotLoaded()
        return analyzer

    def analyze(self, call, at=None):
        return self._current().analyze(call, at)

    def check_whitelist(self, call, adif, at=None):
        return self._current().check_whitelist(call, adif, at)
