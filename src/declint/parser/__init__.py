from declint.parser.errors import ParseError
from declint.parser.transformer import parse_stylesheet

__all__ = ["ParseError", "parse_stylesheet"]
