# error hierarchy shared by every layer
# callers can catch LifeExpectancyError alone, the service distinguishes the subclasses

from __future__ import annotations


class LifeExpectancyError(RuntimeError):
    pass


class NetworkError(LifeExpectancyError):
    # transport or http status failure while fetching the source page
    pass


class ParseError(LifeExpectancyError):
    # the source page did not have the shape we expect
    pass


class TableNotFound(ParseError):
    pass


class RowShapeError(ParseError):
    pass


class NumericParseError(ParseError):
    pass


class DeserializationError(LifeExpectancyError):
    # cache blob or default data file is not a valid statistics table
    pass


class FilesystemError(LifeExpectancyError):
    pass


class ConfigError(LifeExpectancyError):
    pass
