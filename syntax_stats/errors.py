"""
Error taxonomy for syntax_stats.

Every fatal condition carries the process exit status the CLI reports
for it. Library code raises these; only ``analyze.main`` turns them into
a message and an exit.
"""


class SyntaxStatsError(Exception):
    """Base class for all analysis errors."""
    exit_code = 1


class UsageError(SyntaxStatsError):
    """Bad command line (wrong argument count)."""
    exit_code = 1


class LocationResolutionError(SyntaxStatsError):
    """The file is unknown to the unit or an offset cannot be resolved."""
    exit_code = 1


class RangeConstructionError(SyntaxStatsError):
    """Both locations resolved but no valid range spans them."""
    exit_code = 1


class ParseFailure(SyntaxStatsError):
    """The parser could not build a translation unit."""
    exit_code = -1


class UnitDisposedError(SyntaxStatsError):
    """A translation unit or token batch was used after disposal."""
    exit_code = 1
