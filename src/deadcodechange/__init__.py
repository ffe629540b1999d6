"""deadcodechange — decide whether commits invalidate a dead code analysis."""

__version__ = "0.1.0"
