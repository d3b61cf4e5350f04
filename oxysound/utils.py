import os
from pathlib import Path
from typing import Union

# Fallbacks used when the matching XDG variable is not set.
XDG_DEFAULTS = {
    "XDG_DATA_HOME": (".local", "share"),
    "XDG_CONFIG_HOME": (".config",),
    "XDG_CACHE_HOME": (".cache",),
    "XDG_BIN_HOME": (".local", "bin"),
}


def _alias_value(name: str) -> str:
    if name == "HOME":
        return str(Path.home())
    value = os.environ.get(name)
    if value:
        return value
    return str(Path.home().joinpath(*XDG_DEFAULTS[name]))


def expand_path_aliases(path: Union[str, Path]) -> Path:
    """
    Expands `~`, `$HOME` and the `$XDG_*_HOME` aliases of a path.

    XDG aliases resolve to their standard location when the variable is unset,
    any other component is left untouched.
    """
    parts = []
    for part in Path(path).expanduser().parts:
        name = part[1:] if part.startswith("$") else None
        if name == "HOME" or name in XDG_DEFAULTS:
            parts.append(_alias_value(name))
        else:
            parts.append(part)
    return Path(*parts) if parts else Path(path)
