"""Great-circle distance between two coordinates, in kilometers.

The same formula exists twice: as plain Python for the per-hotel strategy and
as a SQL expression for the single-query strategy. Both must stay identical,
including the clamp of the ``acos`` argument to [-1, 1]. Floating point drift
pushes it just past 1 for identical points and just past -1 for antipodal
ones.
"""
import math

from sqlalchemy import Float, func, literal
from sqlalchemy.sql.elements import ColumnElement

KM_PER_DEGREE = 111.111


def compute_distance(lat_from: float, lng_from: float, lat_to: float, lng_to: float) -> float:
    return KM_PER_DEGREE * math.degrees(math.acos(max(-1.0, min(
        1.0,
        math.cos(math.radians(lat_to))
        * math.cos(math.radians(lat_from))
        * math.cos(math.radians(lng_to - lng_from))
        + math.sin(math.radians(lat_to))
        * math.sin(math.radians(lat_from))
    ))))


def distance_expression(
    lat_from: float,
    lng_from: float,
    lat_to: ColumnElement,
    lng_to: ColumnElement,
) -> ColumnElement:
    """SQL rendition of compute_distance from a bound search point to two columns"""
    lat_from_param = literal(float(lat_from), Float)
    lng_from_param = literal(float(lng_from), Float)
    return literal(KM_PER_DEGREE, Float) * _fn("degrees", _fn("acos", func.greatest(
        literal(-1.0, Float),
        func.least(
            literal(1.0, Float),
            _fn("cos", _fn("radians", lat_to))
            * _fn("cos", _fn("radians", lat_from_param))
            * _fn("cos", _fn("radians", lng_to - lng_from_param))
            + _fn("sin", _fn("radians", lat_to))
            * _fn("sin", _fn("radians", lat_from_param)),
            type_=Float,
        ),
        type_=Float,
    )))


def _fn(name: str, argument: ColumnElement) -> ColumnElement:
    return getattr(func, name)(argument, type_=Float)
