# trophyhunter/core/codec/__init__.py

"""
Компактный код для ручного переноса данных между устройствами.

`from trophyhunter.core.codec import encode, decode`
"""

from .compact import CODE_PREFIX, FIELD_ORDER, decode, decode_records, encode  # noqa: F401

__all__: list[str] = ["CODE_PREFIX", "FIELD_ORDER", "encode", "decode", "decode_records"]
