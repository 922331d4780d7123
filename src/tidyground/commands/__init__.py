"""Shell commands exposing tidyground functionalities.

Tutorial
========

``tidyground-tutorial`` runs the examples of a tutorial chapter::

    tidyground-tutorial data-transformation --section select

Tables are printed, plots are saved in the output directory
(``plots/`` by default, or ``$TIDYGROUND_OUTPUT_DIR``)::

    tidyground-tutorial data-visualisation --example facet_grid_drv_cyl -o /tmp/plots

The examples of a chapter can be listed with::

    tidyground-tutorial data-visualisation --list

Datasets are downloaded the first time they are needed, see
:mod:`tidyground.datasets` for where they are stored.
"""
