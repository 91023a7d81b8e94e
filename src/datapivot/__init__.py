"""DataPivot

An in-memory tabular data engine for pivoting, aggregating and reshaping data.

DataPivot stores rectangular data as named columns of text cells
and exposes pivot, aggregation, grouping, reshaping (wide to long and back),
joining and sorting operations that each produce a new table.

The platform is constituted by multiple components, each isolated within its own
package and each self documented.

The primary components are:

* The Table, in charge of storing the data (:mod:`datapivot.table`).
* The Compute Engine, in charge of executing analyses on the data (:mod:`datapivot.compute`).
* The Dataframe API, which provides an high level API for the compute engine (:mod:`datapivot.dataframe`).

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import compute
from .table import Table

__all__ = ("compute", "Table")
