"""esmodels - typed request/response models for the Elasticsearch REST API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("esmodels")
except PackageNotFoundError:
    __version__ = "(local)"
