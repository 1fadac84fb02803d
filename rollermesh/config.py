# rollermesh/config.py
from __future__ import annotations

import os
from typing import Optional

VALIDATE_ENV = "ROLLERMESH_VALIDATE"
_FALSE_VALUES = {"0", "false", "no", "off"}


def validation_enabled(override: Optional[bool] = None) -> bool:
    """Whether STL writers should check every face they write.

    An explicit override wins; otherwise ROLLERMESH_VALIDATE decides and
    anything but a false-ish value keeps validation on.
    """
    if override is not None:
        return bool(override)
    raw = str(os.environ.get(VALIDATE_ENV, "1") or "1").strip().lower()
    return raw not in _FALSE_VALUES
