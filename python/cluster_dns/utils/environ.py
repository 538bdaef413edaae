from __future__ import annotations

import os
import re
from typing import Mapping

# a '$' and the variable reference following it, if there is one
_VAR_RE = re.compile(r"\$(\{[^}]*\}|\{|[*#$@!?\-0-9]|\w+)?", re.ASCII)


def expand_env(value: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Replace '$NAME' and '${NAME}' references in 'value' with values of environment variables.

    Undefined variables are replaced with an empty string, broken references
    such as '${' or '${}' are removed. A '$' that is not followed by a name is kept.
    """

    env = os.environ if environ is None else environ

    def replace(match: re.Match[str]) -> str:
        ref = match.group(1)
        if ref is None:
            return "$"
        if ref.startswith("{"):
            ref = ref[1:-1]
            if not ref:
                return ""
        return env.get(ref, "")

    return _VAR_RE.sub(replace, value)
