# topmark:header:start
#
#   project      : BuildStats
#   file         : kinds.py
#   file_relpath : src/buildstats/hooks/kinds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hook kinds understood by the extraction and printing pipelines."""

from __future__ import annotations

from enum import Enum


class HookKind(str, Enum):
    """Kinds of hooks a handler can be registered for.

    Attributes:
        EXTRACT: Populate the output object for a data item (all handlers run).
        FILTER: Decide whether an array item is kept (an item is dropped when a
            handler returns ``False``).
        GET_ITEM_NAME: Semantic name of the elements of an array (first result wins).
        GET_ITEM_FACTORY: Alternate extraction pipeline for an item (first result wins).
        MERGE: Collapse an array of report nodes into a mapping (first result wins).
        PRINT: Render a value (first result wins).
        SORT_ELEMENTS: Reorder the fields of an object before printing (waterfall).
        PRINT_ITEMS: Join rendered array items (first result wins).
        PRINT_ELEMENTS: Join rendered object fields (first result wins).
    """

    EXTRACT = "extract"
    FILTER = "filter"
    GET_ITEM_NAME = "getItemName"
    GET_ITEM_FACTORY = "getItemFactory"
    MERGE = "merge"
    PRINT = "print"
    SORT_ELEMENTS = "sortElements"
    PRINT_ITEMS = "printItems"
    PRINT_ELEMENTS = "printElements"
