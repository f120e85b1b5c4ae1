"""Generated API models."""

from .aggregations import *
from .cat import *
from .common import *
from .nodes import *
from .query_dsl import *
from .search import *
