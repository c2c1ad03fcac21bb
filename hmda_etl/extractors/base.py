from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pandas as pd

# An extractor reads one source file and returns its raw, un-normalized rows.
SourceExtractorFn = Callable[[str | Path], pd.DataFrame]
