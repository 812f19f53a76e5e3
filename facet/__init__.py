from multipledispatch import halt_ordering, restart_ordering

halt_ordering()  # Turn off multipledispatch ordering

from .error import *
from .params import options, params, set_options
from .selectors import (Empty, Indices, Mask, NameRange, Names, normalize,
                        normalize_index)
from .resolve import resolve_columns, resolve_keys, resolve_rows
from .aggregates import Aggregation
from .vector import Vector
from .table import Table
from .group import Group
from .subframes import SubFrames

restart_ordering()  # Restart multipledispatch ordering and do ordering

__version__ = '0.3.0'
