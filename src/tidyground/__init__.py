"""tidyground

The data visualisation and data transformation chapters of
`R for Data Science <http://r4ds.had.co.nz/>`_, statement by statement, in Python.

Every example of the book loads a dataset, applies one transformation
or one plot and shows the result. Here the same examples run on
Apache Arrow tables and are plotted with seaborn.

The project is constituted by multiple components, each isolated within its own
package and each self documented in literate programming style.

The primary components are:

* The Compute Engine, lazy query plans delegating to ``pyarrow.compute``.
* The Dataframe API, the verbs of the transformation chapter on top of the compute engine.
* The Datasets catalog, which provides access to the sample datasets of the book.
* The Plotting helpers, for what seaborn.objects can't express directly.
* The Tutorials, the chapters of the book as runnable examples.

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import compute, dataframe

__all__ = ("compute", "dataframe")
