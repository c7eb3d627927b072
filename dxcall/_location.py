#! /usr/bin/env python3
# -*- coding: utf-8 -*-

"""
representation of coordinates as latitude/longitude

ClubLog gives longitudes + for East, which is what LatLon uses as well.

distance calculations: https://gist.github.com/rochacbruno/2883505
more calculations: http://www.movable-type.co.uk/scripts/latlong.html
"""

import math
import collections

EARTH_RADIUS = 6371 # km

class LatLon(collections.namedtuple("LatLon", "lat lon")):
    __slots__ = ()

    def __new__(cls, lat, lon):
        lat = float(lat)
        lon = float(lon)
        if not -90.0 <= lat <= 90.0:
            raise ValueError("latitude {} is out of range.".format(lat))
        if not -180.0 <= lon <= 180.0:
            raise ValueError("longitude {} is out of range.".format(lon))
        return super().__new__(cls, lat, lon)

    def __repr__(self):
        return "LatLon({:8.5f}, {:8.5f})".format(self.lat, self.lon)

    def __str__(self):
        return "({:8.5f}/{:8.5f})".format(self.lat, self.lon)

    def distance_to(self, other):
        lat1 = math.radians(self.lat)
        lat2 = math.radians(other.lat)
        half_d_lat = math.radians(other.lat - self.lat) / 2
        half_d_lon = math.radians(other.lon - self.lon) / 2
        a = (math.sin(half_d_lat) ** 2
             + math.cos(lat1) * math.cos(lat2) * math.sin(half_d_lon) ** 2)
        return EARTH_RADIUS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    def bearing_to(self, other):
        lat1 = math.radians(self.lat)
        lat2 = math.radians(other.lat)
        d_lon = math.radians(other.lon - self.lon)
        y = math.sin(d_lon) * math.cos(lat2)
        x = (math.cos(lat1) * math.sin(lat2)
             - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon))
        return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0

    def bearing_from(self, other):
        return (self.bearing_to(other) + 180.0) % 360.0
