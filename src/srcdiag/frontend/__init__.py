from .parser import SourceParser, rebase_positions

__all__ = ["SourceParser", "rebase_positions"]
