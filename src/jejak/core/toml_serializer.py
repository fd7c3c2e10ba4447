import pendulum
import tomli_w

from collections.abc import Mapping
from typing import Any


class TomlSerializer:

    @classmethod
    def to_toml_value(cls, value: Any) -> Any:
        """
        TOML has no null, so None entries are dropped. Timezones are written by name,
        which is what Config.from_dict reads back.
        """
        if isinstance(value, (pendulum.Timezone, pendulum.FixedTimezone)):
            return value.name
        if isinstance(value, Mapping):
            return {str(k): cls.to_toml_value(v) for k, v in value.items() if v is not None}
        if isinstance(value, (list, tuple)):
            return [cls.to_toml_value(v) for v in value if v is not None]
        return value

    @classmethod
    def serialize(cls, obj: Any) -> str:
        data = obj.to_dict() if hasattr(obj, "to_dict") else obj
        return tomli_w.dumps(cls.to_toml_value(data))
