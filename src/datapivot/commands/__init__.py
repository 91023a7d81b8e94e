"""Shell commands exposing DataPivot functionalities.

This module contains the shell commands that can be used to interact with DataPivot.

Pivot
=====

``datapivot-pivot`` builds a pivot table out of a data file::

    datapivot-pivot sales.csv --rows Region --columns Product --values Sales --agg sum

CSV, JSON (array of objects) and Parquet files are supported,
the format is guessed from the file extension unless ``--format`` is provided.
"""
