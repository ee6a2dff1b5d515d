import logging
import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    Y_AS_VOWEL: bool = True

    DEFAULT_DIFFICULTY: str = "normal"
    DAILY_DIFFICULTY: str = "normal"

    POOL_TARGET: int = 2
    POOL_WARM_ON_STARTUP: bool = True

    MAX_RESULTS: int = 50
    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "DEFAULT_DIFFICULTY": str,
    "DAILY_DIFFICULTY": str,
    "POOL_TARGET": int,
    "MAX_RESULTS": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "0", "false", "no"):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected a boolean, got {value!r}")
    if typ is int:
        if isinstance(value, bool):
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return typ(value)


def _validate(name: str, value):
    if name.endswith("_DIFFICULTY"):
        from wordsprint.evaluator import DIFFICULTIES
        if value.lower() not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty {value!r}")
    elif name in ("POOL_TARGET", "MAX_RESULTS") and value < 0:
        raise ValueError("must not be negative")


def apply_log_level(cfg: Settings):
    logging.getLogger("wordsprint").setLevel(logging.DEBUG if cfg.DEBUG else logging.INFO)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values; returns {field: error} for anything rejected."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            errors[name] = "not an editable setting"
            continue
        try:
            coerced = _coerce(value, typ)
            _validate(name, coerced)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        setattr(cfg, name, coerced)
        if name == "DEBUG":
            apply_log_level(cfg)
    return errors


settings = Settings()
