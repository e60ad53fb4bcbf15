"""Path Convertors — route parameter types beyond Starlette's built-ins.

Invariants:
    - "idlist" matches the text between the parentheses of collection/({ids}),
      including nothing at all, so "()" reaches the handler and becomes a 400
      instead of an unmatched-route 404
    - Registered at import; route modules import this before declaring paths
"""

from starlette.convertors import Convertor, register_url_convertor


class IdListConvertor(Convertor[str]):
    regex = "[^/]*"

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("idlist", IdListConvertor())
