# topmark:header:start
#
#   project      : BuildStats
#   file         : __init__.py
#   file_relpath : src/buildstats/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildStats package.

BuildStats turns an in-memory build result into a plain, serializable report
tree and renders that tree as human-readable text. Both stages are driven by
handlers registered against hierarchical type paths in a
[`HookRegistry`][buildstats.hooks.registry.HookRegistry], so plugins can add,
replace or suppress fields without touching the pipelines.

Typical usage:
    ```python
    from buildstats.api import Stats
    from buildstats.config import MutableStatsOptions

    options = MutableStatsOptions.from_preset("normal").freeze()
    stats = Stats(build_result)
    tree = stats.to_dict(options)
    text = stats.to_string(options)
    ```
"""

from __future__ import annotations
