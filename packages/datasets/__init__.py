from .validator import validate_wordlist, pretty_summary
from .io import read_lines, write_lines, load_wordlist, write_wordlist

__all__ = ["validate_wordlist", "pretty_summary", "load_wordlist", "write_wordlist"]
