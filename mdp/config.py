#!/usr/bin/env python3
from __future__ import annotations

import os
from typing import Mapping, Optional

# Fallback template path when -t is not given
ENV_TEMPLATE = "MDP_TEMPLATE"


def resolve_template(override: Optional[str], environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Pick the template source for this run.

    Order: explicit path (-t), then $MDP_TEMPLATE, then None which means
    "use the built-in default template".
    """
    if override:
        return override
    env = os.environ if environ is None else environ
    from_env = (env.get(ENV_TEMPLATE) or "").strip()
    if from_env:
        return from_env
    return None


__all__ = ["ENV_TEMPLATE", "resolve_template"]
