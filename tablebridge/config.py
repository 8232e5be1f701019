import contextlib
import datetime

import numpy as np

CONFIG_DEFAULTS = {
    "native_epoch": "2000-01-01",
    # None means the host's local zone
    "local_timezone": None,
    "symbols_as_categorical": True,
    "record_native_types": True,
    "use_native_type_hints": True,
}


def _validate_epoch(value):
    if not isinstance(value, str):
        raise TypeError(f"native_epoch must be a date string, got {type(value).__name__}")
    try:
        epoch = np.datetime64(value)
    except ValueError:
        raise ValueError(f"native_epoch must be a date such as '2000-01-01', got '{value}'")
    if np.isnat(epoch) or epoch != epoch.astype("datetime64[D]"):
        raise ValueError(f"native_epoch must fall on midnight, got '{value}'")


def _validate_timezone(value):
    if value is not None and not isinstance(value, (str, datetime.tzinfo)):
        raise TypeError(
            f"local_timezone must be None, a zone name or a tzinfo, got {type(value).__name__}",
        )


def _validate_flag(value):
    if not isinstance(value, bool):
        raise TypeError(f"Expected True or False, got {value!r}")


VALIDATORS = {
    "native_epoch": _validate_epoch,
    "local_timezone": _validate_timezone,
    "symbols_as_categorical": _validate_flag,
    "record_native_types": _validate_flag,
    "use_native_type_hints": _validate_flag,
}


class Config:
    def __init__(self, default_values, validators=None):
        self._defaults = default_values
        self._data = default_values.copy()
        self._validators = validators or {}

    def _check_key(self, key):
        if key not in self._data:
            raise KeyError(f"Invalid option specified: {key}")

    def set_option(self, key, value):
        self._check_key(key)
        validate = self._validators.get(key)
        if validate is not None:
            validate(value)
        self._data[key] = value

    def get_option(self, key):
        self._check_key(key)
        return self._data[key]

    def reset_option(self, key):
        self._check_key(key)
        self._data[key] = self._defaults[key]

    @contextlib.contextmanager
    def with_options(self, **options):
        """Temporarily sets options, restoring the previous values on exit"""
        previous = {key: self.get_option(key) for key in options}
        try:
            for key, value in options.items():
                self.set_option(key, value)
            yield self
        finally:
            self._data.update(previous)

    def __repr__(self):
        title = "Tablebridge Global Config Settings"
        lines = [title, "-" * len(title)]
        lines.extend(f"{key}: {value}" for key, value in self._data.items())
        return "\n".join(lines)


config = Config(CONFIG_DEFAULTS, VALIDATORS)
