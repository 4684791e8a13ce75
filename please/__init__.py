"""please - turn a plain English task description into a ready to review shell script."""

__version__ = "1.2.0"
