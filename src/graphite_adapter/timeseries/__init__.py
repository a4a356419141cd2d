"""Timeseries models and query types."""

from .models import Element, RawResponse, RawSeries, ResultSet, Series, TagSet
from .queries import BandQuery, RenderRequest, SeriesQuery

__all__ = [
    "BandQuery",
    "SeriesQuery",
    "RenderRequest",
    "TagSet",
    "Series",
    "Element",
    "ResultSet",
    "RawSeries",
    "RawResponse",
]
