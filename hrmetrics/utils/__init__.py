"""Shared utilities for the metrics engine."""

from hrmetrics.utils.io import read_data_file, read_entity, write_output
from hrmetrics.utils.periods import Period, TimeWindow, resolve_window, tenure_years
from hrmetrics.utils.transforms import normalize_columns, safe_ratio
from hrmetrics.utils.validators import validate_dataframe
from hrmetrics.utils.types import DataContext, LabeledSeries, MemberList
