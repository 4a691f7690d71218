import os
from dataclasses import dataclass, field
from pathlib import Path

_TRUE = ("1", "true", "yes")
_FALSE = ("0", "false", "no")


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 1
    MAX_RESULTS: int = 0  # 0 = no limit

    TILE_SPELLINGS: str = "q=qu"

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "MIN_WORD_LENGTH": int,
    "TILE_SPELLINGS": str,
    "DEBUG": bool,
}


def _coerce(current, value):
    """Convert `value` to the type of `current`."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if isinstance(current, int):
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **changes) -> dict[str, str]:
    """Apply editable changes to `cfg`. Returns {field: error} for rejected ones."""
    errors = {}
    for name, value in changes.items():
        if name not in EDITABLE_FIELDS:
            if name in cfg.__dataclass_fields__:
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            new_value = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if isinstance(new_value, int) and not isinstance(new_value, bool) and new_value < 0:
            errors[name] = "must be >= 0"
            continue
        setattr(cfg, name, new_value)
    return errors


settings = Settings()
