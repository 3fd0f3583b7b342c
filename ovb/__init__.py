"""
ovb -- omitted variable bias in OLS, demonstrated on simulated data.

Each sub-module covers one step of the pipeline using numpy / scipy /
pandas: correlation matrix -> sampling -> outcome -> OLS fits -> tables
and figures.

`plotting` and `report` are not imported here; import them directly so
that matplotlib and reportlab load only when figures or a PDF are built.
"""

from .utils import ols_fit, add_const
from . import correlation
from . import simulate
from . import ols
from . import reporting
from . import scenario
