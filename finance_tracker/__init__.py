"""Top-level package for the finance tracker transformation layer.

The modules turn records fetched from the tracker's REST backend into
table views and chart series:

* ``joiner`` - category id to display name resolution
* ``sorting`` / ``table_view`` - tri-state column sorting of tables
* ``aggregation`` - category/source shares and rolling monthly totals
* ``budgets`` - month and category budget filters
* ``visualization`` - Plotly figures for the resulting series
* ``ingest`` - loading saved list-endpoint payloads

A text report over a saved export can be produced with:

```bash
python scripts/summarize_export.py --data-dir data/
```
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import budgets  # noqa: F401  # re-exported for convenience
from . import joiner  # noqa: F401  # re-exported for convenience
from . import sorting  # noqa: F401  # re-exported for convenience
from . import table_view  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience

__all__ = ["aggregation", "budgets", "joiner", "sorting", "table_view", "visualization"]
