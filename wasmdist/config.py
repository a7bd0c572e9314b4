"""YAML build configuration with profile inheritance.

Without a config file the built-in defaults describe the plain
``wasm-pack build --target web --out-dir dist`` build plus the two
static assets.  A ``wasmdist.yaml`` in the project directory can
override any of them, either as a flat mapping or as named
``profiles:`` that inherit from each other through a ``base:`` key.
"""

import copy
from pathlib import Path

import yaml

CONFIG_FILENAME = 'wasmdist.yaml'

DEFAULTS = {
    'tool': 'wasm-pack',
    'target': 'web',
    'out_dir': 'dist',
    'extra_args': [],
    'assets': ['src/index.html', 'src/style.css'],
}

_STRING_KEYS = ('tool', 'target', 'out_dir')
_LIST_KEYS = ('extra_args', 'assets')


def default_settings():
    """Return a fresh copy of the built-in settings."""
    return copy.deepcopy(DEFAULTS)


def _deep_merge(base, overrides):
    """Layer a profile's settings over its base.

    ``extra_args`` and ``assets`` are replaced whole, never concatenated,
    so a profile states its complete asset list.  A null value drops the
    key so the built-in default applies again.
    """
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _resolve_profile(name, all_raw, resolved_cache, chain=()):
    """Resolve one profile, following ``base`` references.

    Parameters
    ----------
    name : str
        Profile name.
    all_raw : dict
        All raw profiles, by name.
    resolved_cache : dict
        Already-resolved profiles.
    chain : tuple
        Profiles currently being resolved, for cycle detection.

    Returns
    -------
    dict : Profile with its base chain merged in (defaults not applied).
    """
    if name in resolved_cache:
        return resolved_cache[name]
    if name in chain:
        cycle = ' -> '.join(chain + (name,))
        raise ValueError(f"Profile inheritance cycle: {cycle}")

    raw = all_raw[name]
    if not isinstance(raw, dict):
        raise ValueError(f"Profile '{name}' must be a mapping")

    if 'base' in raw:
        base_name = raw['base']
        if not isinstance(base_name, str):
            raise ValueError(f"Profile '{name}' base must be a profile name")
        if base_name not in all_raw:
            raise ValueError(
                f"Profile '{name}' references unknown base '{base_name}'")
        base_resolved = _resolve_profile(
            base_name, all_raw, resolved_cache, chain + (name,))
        overrides = {k: v for k, v in raw.items() if k != 'base'}
        resolved = _deep_merge(base_resolved, overrides)
    else:
        resolved = copy.deepcopy(raw)

    resolved_cache[name] = resolved
    return resolved


def validate_settings(settings):
    """Check and normalise a settings dict in place; return it.

    Unknown keys and wrongly typed values raise ValueError.  Paths are
    kept as strings relative to the project directory.
    """
    unknown = sorted(set(settings) - set(DEFAULTS), key=str)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(map(str, unknown))}")

    for key in _STRING_KEYS:
        value = settings[key]
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{key}' must be a non-empty string, got {value!r}")
        settings[key] = value.strip()

    for key in _LIST_KEYS:
        value = settings[key]
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise ValueError(f"'{key}' must be a list, got {value!r}")
        # Numbers parsed by YAML become argv strings.
        items = []
        for item in value:
            if isinstance(item, (dict, list)) or item is None:
                raise ValueError(f"'{key}' entries must be scalars, got {item!r}")
            items.append(str(item))
        settings[key] = items

    if not settings['assets']:
        raise ValueError("'assets' must name at least one file")
    names = [Path(a).name for a in settings['assets']]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(
            f"Assets would overwrite each other in the bundle: {', '.join(duplicates)}")

    return settings


def load_config(path, profile=None):
    """Load build settings from a YAML file.

    Supports:
    - Flat mapping of settings at the top level
    - ``build:`` top-level key holding the settings
    - ``profiles:`` top-level key with ``base:`` inheritance

    Parameters
    ----------
    path : str or Path
        Path to YAML config file.
    profile : str or None
        Profile to select.  Defaults to the only profile, or ``default``.

    Returns
    -------
    dict : Validated settings, defaults filled in.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raise ValueError(f"Empty config file: {path}")
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    if 'profiles' in raw or 'build' in raw:
        if 'profiles' in raw and 'build' in raw:
            raise ValueError(f"Use either 'profiles' or 'build', not both: {path}")
        extra = sorted((k for k in raw if k not in ('profiles', 'build')), key=str)
        if extra:
            raise ValueError(
                f"Unknown top-level keys: {', '.join(map(str, extra))}")

    if 'profiles' in raw:
        profiles_raw = raw['profiles']
        if not isinstance(profiles_raw, dict) or not profiles_raw:
            raise ValueError(f"'profiles' must be a non-empty mapping: {path}")
    elif 'build' in raw:
        profiles_raw = {'default': raw['build'] or {}}
    else:
        profiles_raw = {'default': raw}

    if profile is None:
        if len(profiles_raw) == 1:
            profile = next(iter(profiles_raw))
        else:
            profile = 'default'
    if profile not in profiles_raw:
        available = ', '.join(sorted(profiles_raw))
        raise ValueError(f"Unknown profile '{profile}' (available: {available})")

    resolved = _resolve_profile(profile, profiles_raw, {})
    # Keys removed with null fall back to the built-in default.
    settings = default_settings()
    settings.update(_deep_merge(settings, resolved))
    return validate_settings(settings)


def resolve_settings(project_dir, config_path=None, profile=None):
    """Settings for a project: explicit file, ``wasmdist.yaml``, or defaults.

    An explicit ``config_path`` must exist.  A ``profile`` without any
    config file to select it from is an error.
    """
    project_dir = Path(project_dir)
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_absolute():
            config_path = project_dir / config_path
        if not config_path.exists():
            raise FileNotFoundError(f"config file not found: {config_path}")
        return load_config(config_path, profile)

    implicit = project_dir / CONFIG_FILENAME
    if implicit.exists():
        return load_config(implicit, profile)

    if profile is not None:
        raise ValueError(f"Profile '{profile}' requested but no {CONFIG_FILENAME} found")
    return default_settings()
